"""Handlers de eventos de domínio"""
from application.events.weather_forecast_created_handler import WeatherForecastCreatedEventHandler

__all__ = ['WeatherForecastCreatedEventHandler']
