"""Infrastructure Providers - Implementações de provedores externos"""

from infrastructure.adapters.output.providers.openbrewerydb.openbrewerydb_provider import OpenBreweryDbProvider

__all__ = ['OpenBreweryDbProvider']
