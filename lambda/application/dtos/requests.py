"""
Request DTOs - Binding de body/query string para commands e queries

Valores ausentes viram None e ficam para as regras de validação (REQUIRED);
valores malformados (UUID, data ou inteiro inválidos) viram erros de binding
reportados juntos como ValidationException 400.
"""
import json
import uuid
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from application.commands import (
    CreateWeatherForecastCommand,
    DeleteWeatherForecastCommand,
    UpdateWeatherForecastCommand,
)
from application.queries import GetAllWeatherForecastsQuery, GetWeatherForecastByIdQuery
from domain.constants import Messages, Pagination as PaginationDefaults, ValidationCodes
from domain.value_objects.pagination import Pagination
from shared.config.settings import DEFAULT_PAGE_SIZE
from shared.pipeline.exceptions import ValidationException
from shared.pipeline.validation import ValidationError, ValidationResult


def parse_json_body(raw_body: Optional[str]) -> Dict[str, Any]:
    """
    Decodifica o body JSON da requisição

    Raises:
        ValidationException: Se o body não for um objeto JSON
    """
    if raw_body in (None, ''):
        return {}

    try:
        body = json.loads(raw_body) if isinstance(raw_body, (str, bytes)) else raw_body
    except (TypeError, ValueError):
        body = None

    if not isinstance(body, dict):
        raise ValidationException(ValidationResult.failure(ValidationError(
            field='body',
            code=ValidationCodes.INVALID_FORMAT,
            message="Request body must be a JSON object",
            attempted_value=raw_body
        )))

    return body


class RequestBinder:
    """
    Converte valores crus em tipos da requisição acumulando erros de binding

    Uso:
        binder = RequestBinder(body)
        command = CreateWeatherForecastCommand(date=binder.date('date'), ...)
        binder.raise_if_invalid()
    """

    def __init__(self, source: Optional[Mapping[str, Any]]):
        self._source = source or {}
        self.errors: List[ValidationError] = []

    def text(self, *names: str) -> Optional[str]:
        _, raw = self._raw(names)
        if raw is None:
            return None
        return str(raw).strip()

    def uuid(self, *names: str) -> Optional[uuid.UUID]:
        name, raw = self._raw(names)
        if raw is None:
            return None
        try:
            return uuid.UUID(str(raw).strip())
        except ValueError:
            return self._fail(name, raw)

    def date(self, *names: str) -> Optional[date]:
        name, raw = self._raw(names)
        if raw is None:
            return None
        try:
            return date.fromisoformat(str(raw).strip())
        except ValueError:
            return self._fail(name, raw, ValidationCodes.INVALID_DATE, Messages.INVALID_DATE)

    def integer(self, *names: str, default: Optional[int] = None) -> Optional[int]:
        name, raw = self._raw(names)
        if raw is None:
            return default

        if isinstance(raw, bool):
            return self._fail(name, raw)
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)

        try:
            return int(str(raw).strip())
        except ValueError:
            return self._fail(name, raw)

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationException(ValidationResult.failure(*self.errors))

    def _raw(self, names: Tuple[str, ...]) -> Tuple[str, Any]:
        for name in names:
            value = self._source.get(name)
            if value is not None and value != '':
                return name, value
        return names[0], None

    def _fail(
        self,
        name: str,
        raw: Any,
        code: str = ValidationCodes.INVALID_FORMAT,
        message: str = Messages.INVALID_FORMAT
    ) -> None:
        self.errors.append(ValidationError(
            field=name,
            code=code,
            message=message.format(field=name, value=raw),
            attempted_value=raw
        ))
        return None


def bind_create_command(body: Mapping[str, Any]) -> CreateWeatherForecastCommand:
    binder = RequestBinder(body)
    command = CreateWeatherForecastCommand(
        date=binder.date('date'),
        temperature_c=binder.integer('temperatureC'),
        summary=binder.text('summary')
    )
    binder.raise_if_invalid()
    return command


def bind_update_command(body: Mapping[str, Any]) -> UpdateWeatherForecastCommand:
    binder = RequestBinder(body)
    command = UpdateWeatherForecastCommand(
        weather_forecast_id=binder.uuid('id', 'weatherForecastId'),
        temperature_c=binder.integer('temperatureC'),
        summary=binder.text('summary')
    )
    binder.raise_if_invalid()
    return command


def bind_delete_command(body: Mapping[str, Any]) -> DeleteWeatherForecastCommand:
    binder = RequestBinder(body)
    command = DeleteWeatherForecastCommand(weather_forecast_id=binder.uuid('id', 'weatherForecastId'))
    binder.raise_if_invalid()
    return command


def bind_get_by_id_query(weather_forecast_id: Optional[str]) -> GetWeatherForecastByIdQuery:
    binder = RequestBinder({'id': weather_forecast_id})
    query = GetWeatherForecastByIdQuery(weather_forecast_id=binder.uuid('id'))
    binder.raise_if_invalid()
    return query


def bind_get_all_query(query_params: Optional[Mapping[str, Any]]) -> GetAllWeatherForecastsQuery:
    binder = RequestBinder(query_params)
    query = GetAllWeatherForecastsQuery(
        summary=binder.text('summary'),
        minimum_date=binder.date('minDate'),
        maximum_date=binder.date('maxDate'),
        minimum_temperature=binder.integer('minTemp'),
        maximum_temperature=binder.integer('maxTemp'),
        pagination=Pagination(
            page_number=binder.integer('pageNumber', default=PaginationDefaults.DEFAULT_PAGE_NUMBER),
            page_size=binder.integer('pageSize', default=DEFAULT_PAGE_SIZE)
        )
    )
    binder.raise_if_invalid()
    return query
