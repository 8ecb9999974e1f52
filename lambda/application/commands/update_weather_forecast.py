"""
Update Weather Forecast
Altera temperatura e summary; a data da previsão nunca muda
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from ddtrace import tracer

from application.commands import rules
from domain.specifications import WeatherForecastSpecification
from shared.config.logger_config import get_logger
from shared.pipeline.cancellation import CancellationToken
from shared.pipeline.validation import ValidationBuilder

logger = get_logger(child=True)


@dataclass(frozen=True)
class UpdateWeatherForecastCommand:
    weather_forecast_id: Optional[uuid.UUID]
    temperature_c: Optional[int]
    summary: Optional[str]

    def define_rules(self, builder: ValidationBuilder) -> None:
        rules.existing_weather_forecast_id(builder, self.weather_forecast_id)
        rules.temperature_c(builder, self.temperature_c)
        rules.summary_name(builder, self.summary)


@tracer.wrap(resource="handler.update_weather_forecast")
async def handle_update_weather_forecast(
    command: UpdateWeatherForecastCommand,
    repository,
    unit_of_work,
    cancellation: CancellationToken
) -> None:
    spec = WeatherForecastSpecification.create().with_id(command.weather_forecast_id)
    weather_forecast = await repository.first(spec, cancellation)

    weather_forecast.change_temperature_c(command.temperature_c).change_summary(command.summary)

    await repository.update(weather_forecast, cancellation)
    await unit_of_work.save_changes(cancellation)

    logger.info("Weather forecast updated", weather_forecast_id=str(command.weather_forecast_id))
