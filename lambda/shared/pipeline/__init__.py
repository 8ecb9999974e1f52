"""Pipeline de requisições: validação, handlers, eventos e cancelamento"""
from .cancellation import CancellationToken
from .events import EventPublisher
from .exceptions import (
    AmbiguousHandlerException,
    DuplicateHandlerException,
    HandlerNotFoundException,
    OperationCancelledException,
    PipelineConfigurationException,
    PipelineException,
    ValidationException,
)
from .pipeline import Flow, Pipeline, RequestScope
from .registry import HandlerRegistry
from .validation import (
    ValidationBuilder,
    ValidationError,
    ValidationResult,
    ValidationState,
    Validator,
)

__all__ = [
    'CancellationToken',
    'EventPublisher',
    'Flow',
    'Pipeline',
    'RequestScope',
    'HandlerRegistry',
    'Validator',
    'ValidationBuilder',
    'ValidationError',
    'ValidationResult',
    'ValidationState',
    'PipelineException',
    'ValidationException',
    'OperationCancelledException',
    'PipelineConfigurationException',
    'HandlerNotFoundException',
    'AmbiguousHandlerException',
    'DuplicateHandlerException',
]
