"""Response DTOs - Contratos de saída dos handlers"""

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict

from domain.entities.weather_forecast import WeatherForecast


@dataclass(frozen=True)
class WeatherForecastResponse:
    """Projeção de uma previsão para a API"""
    id: uuid.UUID
    date: date
    temperature_c: int
    temperature_f: int
    summary_id: int
    summary_description: str

    @staticmethod
    def from_entity(weather_forecast: WeatherForecast) -> 'WeatherForecastResponse':
        """
        Converte WeatherForecast entity para DTO de resposta

        Args:
            weather_forecast: Entidade do domínio

        Returns:
            WeatherForecastResponse DTO
        """
        return WeatherForecastResponse(
            id=weather_forecast.weather_forecast_id,
            date=weather_forecast.date,
            temperature_c=weather_forecast.temperature_c,
            temperature_f=weather_forecast.temperature_f,
            summary_id=int(weather_forecast.summary),
            summary_description=weather_forecast.summary.description
        )

    def to_dict(self) -> Dict[str, Any]:
        """Converte para dicionário (camelCase da API)"""
        return {
            'id': str(self.id),
            'date': self.date.isoformat(),
            'temperatureC': self.temperature_c,
            'temperatureF': self.temperature_f,
            'summaryId': self.summary_id,
            'summaryDescription': self.summary_description
        }
