"""Shared configuration"""
from .settings import API_BASE_PATH, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .logger_config import get_logger, logger

__all__ = ['API_BASE_PATH', 'DEFAULT_PAGE_SIZE', 'MAX_PAGE_SIZE', 'get_logger', 'logger']
