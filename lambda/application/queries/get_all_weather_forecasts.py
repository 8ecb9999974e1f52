"""
Get All Weather Forecasts
Filtros opcionais (summary, faixa de datas, faixa de temperatura) + paginação
ordenada por data decrescente
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ddtrace import tracer

from application.dtos.responses import WeatherForecastResponse
from domain.constants import Messages, Temperature, ValidationCodes
from domain.specifications import ORDER_BY_DATE_DESCENDING, WeatherForecastSpecification
from domain.value_objects.pagination import Paginated, Pagination
from domain.value_objects.summary import Summary
from shared.config.logger_config import get_logger
from shared.config.settings import MAX_PAGE_SIZE
from shared.pipeline.cancellation import CancellationToken
from shared.pipeline.validation import ValidationBuilder

logger = get_logger(child=True)


@dataclass(frozen=True)
class GetAllWeatherForecastsQuery:
    summary: Optional[str] = None
    minimum_date: Optional[date] = None
    maximum_date: Optional[date] = None
    minimum_temperature: Optional[int] = None
    maximum_temperature: Optional[int] = None
    pagination: Pagination = field(default_factory=Pagination)

    def define_rules(self, builder: ValidationBuilder) -> None:
        builder.rule_for('pageNumber', self.pagination.page_number).greater_than(0)

        (
            builder.rule_for('pageSize', self.pagination.page_size)
            .greater_than(0)
            .less_or_equals(MAX_PAGE_SIZE)
        )

        (
            builder.rule_for('summary', self.summary)
            .is_enum_name(Summary, allow_values=True)
            .when(lambda value: value not in (None, ''))
        )

        (
            builder.rule_for('minTemp', self.minimum_temperature)
            .greater_or_equals(Temperature.MIN_CELSIUS)
            .when(lambda value: value is not None)
        )

        (
            builder.rule_for('maxTemp', self.maximum_temperature)
            .less_or_equals(Temperature.MAX_CELSIUS)
            .when(lambda value: value is not None)
        )

        (
            builder.rule_for('minDate', self.minimum_date)
            .greater_than(date.min)
            .must(lambda value: self.maximum_date is None or value <= self.maximum_date)
            .with_message(Messages.DATE_RANGE)
            .with_code(ValidationCodes.OUT_OF_RANGE)
            .when(lambda value: value is not None)
        )


@tracer.wrap(resource="handler.get_all_weather_forecasts")
async def handle_get_all_weather_forecasts(
    query: GetAllWeatherForecastsQuery,
    repository,
    unit_of_work,
    cancellation: CancellationToken
) -> Paginated[WeatherForecastResponse]:
    spec = (
        WeatherForecastSpecification.create()
        .with_summary(query.summary)
        .with_date_greater_than(query.minimum_date)
        .with_date_lower_than(query.maximum_date)
        .with_temperature_greater_than(query.minimum_temperature)
        .with_temperature_lower_than(query.maximum_temperature)
    )

    page = await repository.search_paginated(spec, query.pagination, ORDER_BY_DATE_DESCENDING, cancellation)

    logger.debug(
        "Weather forecasts searched",
        page_number=page.page_number,
        page_size=page.page_size,
        total_items=page.total_items
    )
    return page.map(WeatherForecastResponse.from_entity)
