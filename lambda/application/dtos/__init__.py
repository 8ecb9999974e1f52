"""
Application DTOs - Data Transfer Objects para contratos de API

O binding de requisições fica em application.dtos.requests (depende de
commands/queries, que por sua vez usam os DTOs de resposta).
"""

from application.dtos.responses import WeatherForecastResponse

__all__ = ['WeatherForecastResponse']
