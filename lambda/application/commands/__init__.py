"""Commands - escritas validadas do agregado WeatherForecast"""
from application.commands.create_weather_forecast import (
    CreateWeatherForecastCommand,
    handle_create_weather_forecast,
)
from application.commands.update_weather_forecast import (
    UpdateWeatherForecastCommand,
    handle_update_weather_forecast,
)
from application.commands.delete_weather_forecast import (
    DeleteWeatherForecastCommand,
    handle_delete_weather_forecast,
)

__all__ = [
    'CreateWeatherForecastCommand',
    'UpdateWeatherForecastCommand',
    'DeleteWeatherForecastCommand',
    'handle_create_weather_forecast',
    'handle_update_weather_forecast',
    'handle_delete_weather_forecast',
]
