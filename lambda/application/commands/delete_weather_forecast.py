"""Delete Weather Forecast"""
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
class DeleteWeatherForecastCommand:
    weather_forecast_id: Optional[uuid.UUID]

    def define_rules(self, builder: ValidationBuilder) -> None:
        rules.existing_weather_forecast_id(builder, self.weather_forecast_id)


@tracer.wrap(resource="handler.delete_weather_forecast")
async def handle_delete_weather_forecast(
    command: DeleteWeatherForecastCommand,
    repository,
    unit_of_work,
    cancellation: CancellationToken
) -> None:
    spec = WeatherForecastSpecification.create().with_id(command.weather_forecast_id)
    weather_forecast = await repository.first(spec, cancellation)

    await repository.remove(weather_forecast, cancellation)
    await unit_of_work.save_changes(cancellation)

    logger.info("Weather forecast deleted", weather_forecast_id=str(command.weather_forecast_id))
