"""
Testes para os DTOs de request (binding) e response
"""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../'))

import json
import uuid
from datetime import date

import pytest

from application.dtos import WeatherForecastResponse
from application.dtos.requests import (
    bind_create_command,
    bind_delete_command,
    bind_get_all_query,
    bind_get_by_id_query,
    bind_update_command,
    parse_json_body,
)
from domain.constants import ValidationCodes
from domain.entities.weather_forecast import WeatherForecast
from domain.value_objects.summary import Summary
from shared.pipeline.exceptions import ValidationException


class TestParseJsonBody:
    """Testes de decodificação do body"""

    def test_object_body(self):
        assert parse_json_body('{"temperatureC": 25}') == {"temperatureC": 25}

    def test_empty_body_is_empty_object(self):
        assert parse_json_body(None) == {}
        assert parse_json_body('') == {}

    @pytest.mark.parametrize("raw", ['[1, 2]', '"text"', '{not json'])
    def test_non_object_body_rejected(self, raw):
        """REGRA: Body que não é objeto JSON -> 400 INVALID_FORMAT"""
        with pytest.raises(ValidationException) as exc_info:
            parse_json_body(raw)

        error = exc_info.value.result.errors[0]
        assert exc_info.value.status_code == 400
        assert (error.field, error.code) == ('body', ValidationCodes.INVALID_FORMAT)


class TestBindCommands:
    """Testes de binding dos commands"""

    def test_bind_create(self):
        command = bind_create_command({"date": "2024-01-15", "temperatureC": 25, "summary": " Warm "})

        assert command.date == date(2024, 1, 15)
        assert command.temperature_c == 25
        assert command.summary == "Warm"

    def test_bind_create_missing_values_left_for_validation(self):
        command = bind_create_command({})

        assert (command.date, command.temperature_c, command.summary) == (None, None, None)

    def test_bind_create_numeric_strings(self):
        command = bind_create_command({"date": "2024-01-15", "temperatureC": "-7", "summary": "Cool"})
        assert command.temperature_c == -7

    def test_bind_create_invalid_values_reported_together(self):
        """REGRA: Erros de binding são acumulados e reportados juntos"""
        with pytest.raises(ValidationException) as exc_info:
            bind_create_command({"date": "2024-02-30", "temperatureC": "hot", "summary": "Warm"})

        errors = exc_info.value.result.errors
        assert [(error.field, error.code) for error in errors] == [
            ('date', ValidationCodes.INVALID_DATE),
            ('temperatureC', ValidationCodes.INVALID_FORMAT),
        ]

    @pytest.mark.parametrize("temperature", [True, 25.5])
    def test_bind_create_rejects_non_integer_temperature(self, temperature):
        with pytest.raises(ValidationException):
            bind_create_command({"date": "2024-01-15", "temperatureC": temperature, "summary": "Warm"})

    def test_bind_update_accepts_id_aliases(self):
        forecast_id = uuid.uuid4()

        by_id = bind_update_command({"id": str(forecast_id), "temperatureC": 30, "summary": "Hot"})
        by_alias = bind_update_command({"weatherForecastId": str(forecast_id), "temperatureC": 30, "summary": "Hot"})

        assert by_id.weather_forecast_id == forecast_id
        assert by_alias.weather_forecast_id == forecast_id

    def test_bind_delete_invalid_uuid(self):
        with pytest.raises(ValidationException) as exc_info:
            bind_delete_command({"id": "not-a-uuid"})

        assert exc_info.value.result.errors[0].field == 'id'


class TestBindQueries:
    """Testes de binding das queries"""

    def test_bind_get_by_id(self):
        forecast_id = uuid.uuid4()
        assert bind_get_by_id_query(str(forecast_id)).weather_forecast_id == forecast_id

    def test_bind_get_by_id_invalid(self):
        with pytest.raises(ValidationException):
            bind_get_by_id_query("abc")

    def test_bind_get_all_defaults(self):
        query = bind_get_all_query(None)

        assert query.summary is None
        assert query.minimum_date is None
        assert query.pagination.page_number == 1
        assert query.pagination.page_size == 10

    def test_bind_get_all_full(self):
        query = bind_get_all_query({
            "summary": "Warm",
            "minDate": "2024-01-01",
            "maxDate": "2024-01-31",
            "minTemp": "-10",
            "maxTemp": "30",
            "pageNumber": "2",
            "pageSize": "25"
        })

        assert query.summary == "Warm"
        assert query.minimum_date == date(2024, 1, 1)
        assert query.maximum_date == date(2024, 1, 31)
        assert (query.minimum_temperature, query.maximum_temperature) == (-10, 30)
        assert (query.pagination.page_number, query.pagination.page_size) == (2, 25)

    def test_bind_get_all_invalid_page_number(self):
        with pytest.raises(ValidationException) as exc_info:
            bind_get_all_query({"pageNumber": "first"})

        assert exc_info.value.result.errors[0].field == 'pageNumber'


class TestWeatherForecastResponse:
    """Testes da projeção de saída"""

    def test_from_entity(self):
        forecast = WeatherForecast.create(date(2024, 1, 15), 25, Summary.WARM)

        response = WeatherForecastResponse.from_entity(forecast)

        assert response.id == forecast.weather_forecast_id
        assert response.temperature_f == 77
        assert response.summary_id == 5
        assert response.summary_description == "Warm"

    def test_to_dict_is_json_serializable(self):
        forecast = WeatherForecast.create(date(2024, 1, 15), -3, Summary.CHILLY)

        data = json.loads(json.dumps(WeatherForecastResponse.from_entity(forecast).to_dict()))

        assert data == {
            'id': str(forecast.weather_forecast_id),
            'date': '2024-01-15',
            'temperatureC': -3,
            'temperatureF': 27,
            'summaryId': 2,
            'summaryDescription': 'Chilly'
        }
