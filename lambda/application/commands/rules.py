"""
Regras compartilhadas entre commands e queries
Predicados assíncronos recebem repositório e token explicitamente
"""
from datetime import date
from typing import Any

from domain.constants import HttpStatus, Messages, ValidationCodes
from domain.specifications import WeatherForecastSpecification
from domain.value_objects.summary import Summary
from shared.pipeline.cancellation import CancellationToken
from shared.pipeline.validation import RuleGroup, ValidationBuilder


async def weather_forecast_exists(value: Any, repository, cancellation: CancellationToken) -> bool:
    spec = WeatherForecastSpecification.create().with_id(value)
    return await repository.any(spec, cancellation)


async def date_not_in_use(value: date, repository, cancellation: CancellationToken) -> bool:
    spec = WeatherForecastSpecification.create().with_date(value)
    return not await repository.any(spec, cancellation)


def existing_weather_forecast_id(builder: ValidationBuilder, value: Any) -> RuleGroup:
    """Id obrigatório e existente (404 quando não existe)"""
    return (
        builder.rule_for('id', value)
        .not_empty().stop_on_failure()
        .respect(weather_forecast_exists)
        .with_code(ValidationCodes.NOT_FOUND)
        .with_status_code(HttpStatus.NOT_FOUND)
        .with_message(Messages.NOT_FOUND)
    )


def temperature_c(builder: ValidationBuilder, value: Any) -> RuleGroup:
    return (
        builder.rule_for('temperatureC', value)
        .not_null().stop_on_failure()
        .between(-100, 100)
    )


def summary_name(builder: ValidationBuilder, value: Any) -> RuleGroup:
    return (
        builder.rule_for('summary', value)
        .not_empty().stop_on_failure()
        .is_enum_name(Summary)
    )
