"""OpenBreweryDB Provider"""
from .openbrewerydb_provider import OpenBreweryDbProvider

__all__ = ['OpenBreweryDbProvider']
