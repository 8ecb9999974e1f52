"""
Registro explícito request -> handler montado no startup
"""
from application.commands import (
    CreateWeatherForecastCommand,
    DeleteWeatherForecastCommand,
    UpdateWeatherForecastCommand,
    handle_create_weather_forecast,
    handle_delete_weather_forecast,
    handle_update_weather_forecast,
)
from application.queries import (
    GetAllWeatherForecastsQuery,
    GetWeatherForecastByIdQuery,
    handle_get_all_weather_forecasts,
    handle_get_weather_forecast_by_id,
)
from shared.pipeline.registry import HandlerRegistry

HANDLERS = {
    CreateWeatherForecastCommand: handle_create_weather_forecast,
    UpdateWeatherForecastCommand: handle_update_weather_forecast,
    DeleteWeatherForecastCommand: handle_delete_weather_forecast,
    GetWeatherForecastByIdQuery: handle_get_weather_forecast_by_id,
    GetAllWeatherForecastsQuery: handle_get_all_weather_forecasts,
}


def build_handler_registry() -> HandlerRegistry:
    """Registra todos os handlers e verifica exatamente um por tipo de requisição"""
    registry = HandlerRegistry()
    for request_type, handler in HANDLERS.items():
        registry.register(request_type, handler)

    registry.verify(HANDLERS.keys())
    return registry
