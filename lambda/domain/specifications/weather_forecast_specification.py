"""
Specifications de WeatherForecast - filtros opcionais sem branching no chamador
"""
import uuid
from datetime import date
from typing import Optional, Union

from domain.entities.weather_forecast import WeatherForecast
from domain.specifications.specification import Ordering, Specification
from domain.value_objects.summary import Summary


class WeatherForecastSpecification(Specification[WeatherForecast]):
    """Helpers fluentes para consultas de previsões"""

    def with_id(self, weather_forecast_id: uuid.UUID) -> 'WeatherForecastSpecification':
        return self.and_(lambda forecast: forecast.weather_forecast_id == weather_forecast_id)

    def with_summary(self, summary: Optional[Union[Summary, str, int]]) -> 'WeatherForecastSpecification':
        if summary is None or summary == '':
            return self
        expected = Summary.parse(summary)
        return self.and_(lambda forecast: forecast.summary == expected)

    def with_date(self, forecast_date: date) -> 'WeatherForecastSpecification':
        return self.and_(lambda forecast: forecast.date == forecast_date)

    def with_date_greater_than(self, forecast_date: Optional[date]) -> 'WeatherForecastSpecification':
        return self.and_if(
            forecast_date is not None,
            lambda forecast: forecast.date >= forecast_date
        )

    def with_date_lower_than(self, forecast_date: Optional[date]) -> 'WeatherForecastSpecification':
        return self.and_if(
            forecast_date is not None,
            lambda forecast: forecast.date <= forecast_date
        )

    def with_temperature_greater_than(self, temperature: Optional[int]) -> 'WeatherForecastSpecification':
        return self.and_if(
            temperature is not None,
            lambda forecast: forecast.temperature_c >= temperature
        )

    def with_temperature_lower_than(self, temperature: Optional[int]) -> 'WeatherForecastSpecification':
        return self.and_if(
            temperature is not None,
            lambda forecast: forecast.temperature_c <= temperature
        )


ORDER_BY_DATE_DESCENDING: Ordering[WeatherForecast] = Ordering(
    key=lambda forecast: forecast.date,
    descending=True
)
