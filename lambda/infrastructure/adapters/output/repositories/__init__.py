"""Adapters de persistência de WeatherForecast (memória e DynamoDB)"""
from infrastructure.adapters.output.repositories.base import ChangeType, StagedChange
from infrastructure.adapters.output.repositories.in_memory_weather_forecast_repository import (
    InMemoryUnitOfWork,
    InMemoryWeatherForecastRepository,
    InMemoryWeatherForecastStore,
)
from infrastructure.adapters.output.repositories.dynamodb_weather_forecast_repository import (
    DynamoDBUnitOfWork,
    DynamoDBWeatherForecastRepository,
)

__all__ = [
    'ChangeType',
    'StagedChange',
    'InMemoryWeatherForecastStore',
    'InMemoryWeatherForecastRepository',
    'InMemoryUnitOfWork',
    'DynamoDBWeatherForecastRepository',
    'DynamoDBUnitOfWork',
]
