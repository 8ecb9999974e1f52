"""Queries - leituras validadas do agregado WeatherForecast"""
from application.queries.get_weather_forecast_by_id import (
    GetWeatherForecastByIdQuery,
    handle_get_weather_forecast_by_id,
)
from application.queries.get_all_weather_forecasts import (
    GetAllWeatherForecastsQuery,
    handle_get_all_weather_forecasts,
)

__all__ = [
    'GetWeatherForecastByIdQuery',
    'GetAllWeatherForecastsQuery',
    'handle_get_weather_forecast_by_id',
    'handle_get_all_weather_forecasts',
]
