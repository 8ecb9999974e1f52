"""Get Weather Forecast By Id"""
import uuid
from dataclasses import dataclass
from typing import Optional

from ddtrace import tracer

from application.commands import rules
from application.dtos.responses import WeatherForecastResponse
from domain.specifications import WeatherForecastSpecification
from shared.pipeline.cancellation import CancellationToken
from shared.pipeline.validation import ValidationBuilder


@dataclass(frozen=True)
class GetWeatherForecastByIdQuery:
    weather_forecast_id: Optional[uuid.UUID]

    def define_rules(self, builder: ValidationBuilder) -> None:
        rules.existing_weather_forecast_id(builder, self.weather_forecast_id)


@tracer.wrap(resource="handler.get_weather_forecast_by_id")
async def handle_get_weather_forecast_by_id(
    query: GetWeatherForecastByIdQuery,
    repository,
    unit_of_work,
    cancellation: CancellationToken
) -> WeatherForecastResponse:
    spec = WeatherForecastSpecification.create().with_id(query.weather_forecast_id)
    weather_forecast = await repository.first(spec, cancellation)
    return WeatherForecastResponse.from_entity(weather_forecast)
