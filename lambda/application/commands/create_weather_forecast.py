"""
Create Weather Forecast
Cria a previsão e retorna o novo id (publicado como WeatherForecastCreatedEvent)
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ddtrace import tracer

from application.commands import rules
from domain.constants import HttpStatus, Messages, ValidationCodes
from domain.entities.weather_forecast import WeatherForecast
from shared.config.logger_config import get_logger
from shared.pipeline.cancellation import CancellationToken
from shared.pipeline.validation import ValidationBuilder

logger = get_logger(child=True)


@dataclass(frozen=True)
class CreateWeatherForecastCommand:
    date: Optional[date]
    temperature_c: Optional[int]
    summary: Optional[str]

    def define_rules(self, builder: ValidationBuilder) -> None:
        (
            builder.rule_for('date', self.date)
            .not_null().stop_on_failure()
            .is_valid_date().stop_on_failure()
            .past()
            .greater_than(date.min)
            .respect(rules.date_not_in_use)
            .with_code(ValidationCodes.CONFLICT)
            .with_status_code(HttpStatus.CONFLICT)
            .with_message(Messages.CONFLICT)
        )
        rules.temperature_c(builder, self.temperature_c)
        rules.summary_name(builder, self.summary)


@tracer.wrap(resource="handler.create_weather_forecast")
async def handle_create_weather_forecast(
    command: CreateWeatherForecastCommand,
    repository,
    unit_of_work,
    cancellation: CancellationToken
) -> uuid.UUID:
    weather_forecast = WeatherForecast.create(command.date, command.temperature_c, command.summary)

    await repository.add(weather_forecast, cancellation)
    await unit_of_work.save_changes(cancellation)

    logger.info(
        "Weather forecast created",
        weather_forecast_id=str(weather_forecast.weather_forecast_id),
        date=weather_forecast.date.isoformat()
    )
    return weather_forecast.weather_forecast_id
