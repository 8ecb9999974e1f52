"""Specifications de domínio"""
from domain.specifications.specification import Ordering, Specification
from domain.specifications.weather_forecast_specification import (
    ORDER_BY_DATE_DESCENDING,
    WeatherForecastSpecification
)

__all__ = [
    'Ordering',
    'Specification',
    'ORDER_BY_DATE_DESCENDING',
    'WeatherForecastSpecification'
]
