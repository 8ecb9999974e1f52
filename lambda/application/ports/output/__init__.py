"""
Output Ports - Interfaces para comunicação com infraestrutura externa
Define contratos que devem ser implementados pelos adapters de saída
"""

from .weather_forecast_repository_port import IWeatherForecastRepository
from .unit_of_work_port import IUnitOfWork
from .brewery_provider_port import Brewery, IBreweryProvider

__all__ = ['IWeatherForecastRepository', 'IUnitOfWork', 'Brewery', 'IBreweryProvider']
