"""
Testes dos commands (create, update, delete) via pipeline com repositório em memória
"""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../'))

import uuid
from datetime import date, timedelta

import pytest

from application.commands import (
    CreateWeatherForecastCommand,
    DeleteWeatherForecastCommand,
    UpdateWeatherForecastCommand,
)
from domain.constants import ValidationCodes
from domain.events import WeatherForecastCreatedEvent
from domain.specifications import WeatherForecastSpecification
from domain.value_objects.summary import Summary
from shared.pipeline.exceptions import ValidationException


def _days_ago(days: int) -> date:
    return date.today() - timedelta(days=days)


async def _execute(flow, request):
    return await flow.start(request).validate().handle().execute()


async def _errors(flow, request):
    with pytest.raises(ValidationException) as exc_info:
        await _execute(flow, request)
    return exc_info.value


@pytest.mark.asyncio
class TestCreateWeatherForecast:
    """REGRA: Criação valida data (passada e livre), temperatura e summary"""

    async def test_create_persists_and_returns_id(self, flow, store, scope):
        command = CreateWeatherForecastCommand(date=_days_ago(10), temperature_c=25, summary="Warm")

        forecast_id = await _execute(flow, command)

        assert isinstance(forecast_id, uuid.UUID)
        assert len(store) == 1
        stored = await scope.repository.first(WeatherForecastSpecification.create().with_id(forecast_id))
        assert stored.date == _days_ago(10)
        assert stored.summary is Summary.WARM
        assert stored.temperature_f == 77

    async def test_create_publishes_created_event(self, flow, publisher):
        received = []

        async def subscriber(event, cancellation):
            received.append(event)

        publisher.subscribe(WeatherForecastCreatedEvent, subscriber)
        command = CreateWeatherForecastCommand(date=_days_ago(3), temperature_c=5, summary="Cool")

        event = await (
            flow.start(command).validate().handle()
            .transform(lambda forecast_id: WeatherForecastCreatedEvent(weather_forecast_id=forecast_id))
            .publish()
            .execute()
        )
        await publisher.drain(timeout=1)

        assert received == [event]

    async def test_duplicate_date_is_conflict(self, flow, store, make_forecast):
        """REGRA: Data já usada -> 409 CONFLICT"""
        store.seed([make_forecast(days_ago=5)])
        command = CreateWeatherForecastCommand(date=_days_ago(5), temperature_c=20, summary="Mild")

        exception = await _errors(flow, command)

        assert exception.status_code == 409
        assert exception.result.errors[0].code == ValidationCodes.CONFLICT
        assert len(store) == 1

    async def test_today_and_future_dates_rejected(self, flow):
        for forecast_date in (date.today(), date.today() + timedelta(days=1)):
            command = CreateWeatherForecastCommand(date=forecast_date, temperature_c=20, summary="Mild")

            exception = await _errors(flow, command)

            assert exception.status_code == 400
            assert exception.result.errors[0].field == 'date'

    async def test_temperature_out_of_range(self, flow, store):
        command = CreateWeatherForecastCommand(date=_days_ago(2), temperature_c=101, summary="Hot")

        exception = await _errors(flow, command)

        assert exception.status_code == 400
        assert [(error.field, error.code) for error in exception.result.errors] == [
            ('temperatureC', ValidationCodes.OUT_OF_RANGE)
        ]
        assert len(store) == 0

    async def test_temperature_limits_accepted(self, flow, store):
        await _execute(flow, CreateWeatherForecastCommand(date=_days_ago(1), temperature_c=-100, summary="Freezing"))
        await _execute(flow, CreateWeatherForecastCommand(date=_days_ago(2), temperature_c=100, summary="Scorching"))

        assert len(store) == 2

    async def test_unknown_summary_rejected(self, flow):
        command = CreateWeatherForecastCommand(date=_days_ago(2), temperature_c=20, summary="Sunny")

        exception = await _errors(flow, command)

        assert exception.result.errors[0].code == ValidationCodes.INVALID_ENUM

    async def test_missing_fields_accumulate(self, flow):
        exception = await _errors(flow, CreateWeatherForecastCommand(date=None, temperature_c=None, summary=None))

        assert [error.field for error in exception.result.errors] == ['date', 'temperatureC', 'summary']
        assert all(error.code == ValidationCodes.REQUIRED for error in exception.result.errors)

    async def test_conflict_outranks_bad_request(self, flow, store, make_forecast):
        """REGRA: 409 tem precedência sobre 400 no status final"""
        store.seed([make_forecast(days_ago=7)])
        command = CreateWeatherForecastCommand(date=_days_ago(7), temperature_c=500, summary="Warm")

        exception = await _errors(flow, command)

        assert exception.status_code == 409
        assert len(exception.result.errors) == 2


@pytest.mark.asyncio
class TestUpdateWeatherForecast:
    """REGRA: Atualização muda temperatura e summary, nunca a data"""

    async def test_update_changes_fields_and_keeps_date(self, flow, store, scope, make_forecast):
        original = make_forecast(days_ago=4, temperature_c=10, summary=Summary.COOL)
        store.seed([original])

        command = UpdateWeatherForecastCommand(
            weather_forecast_id=original.weather_forecast_id,
            temperature_c=35,
            summary="Hot"
        )
        assert await _execute(flow, command) is None

        updated = await scope.repository.first(
            WeatherForecastSpecification.create().with_id(original.weather_forecast_id)
        )
        assert updated.temperature_c == 35
        assert updated.summary is Summary.HOT
        assert updated.date == original.date
        assert updated.created_at == original.created_at
        assert updated.updated_at is not None

    async def test_update_unknown_id_is_not_found(self, flow):
        command = UpdateWeatherForecastCommand(weather_forecast_id=uuid.uuid4(), temperature_c=35, summary="Hot")

        exception = await _errors(flow, command)

        assert exception.status_code == 404
        assert exception.result.errors[0].code == ValidationCodes.NOT_FOUND

    async def test_update_missing_id_is_bad_request(self, flow):
        command = UpdateWeatherForecastCommand(weather_forecast_id=None, temperature_c=35, summary="Hot")

        exception = await _errors(flow, command)

        assert exception.status_code == 400
        assert exception.result.errors[0].code == ValidationCodes.REQUIRED

    async def test_not_found_outranks_other_errors(self, flow):
        command = UpdateWeatherForecastCommand(weather_forecast_id=uuid.uuid4(), temperature_c=-150, summary="Sunny")

        exception = await _errors(flow, command)

        assert exception.status_code == 404
        assert len(exception.result.errors) == 3


@pytest.mark.asyncio
class TestDeleteWeatherForecast:
    """REGRA: Exclusão remove a previsão; id inexistente -> 404"""

    async def test_delete_removes(self, flow, store, make_forecast):
        forecast = make_forecast()
        store.seed([forecast, make_forecast(days_ago=2)])

        await _execute(flow, DeleteWeatherForecastCommand(weather_forecast_id=forecast.weather_forecast_id))

        assert len(store) == 1

    async def test_delete_twice_is_not_found(self, flow, store, make_forecast):
        forecast = make_forecast()
        store.seed([forecast])
        command = DeleteWeatherForecastCommand(weather_forecast_id=forecast.weather_forecast_id)

        await _execute(flow, command)
        exception = await _errors(flow, command)

        assert exception.status_code == 404
        assert len(store) == 0
