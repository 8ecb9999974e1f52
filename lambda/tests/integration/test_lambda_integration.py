"""
Testes de integração do Lambda - Weather Forecast API
Organizados em classes pytest para melhor estruturação
Executar: pytest lambda/tests/integration/test_lambda_integration.py -v
"""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../'))

import asyncio
import json
import time
import uuid
from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from api_gateway_events import (
    WEATHER_FORECAST_PATH,
    MockContext,
    build_create_event,
    build_delete_event,
    build_get_event,
    build_list_event,
    build_update_event,
    response_header,
)
from application.ports.output.brewery_provider_port import Brewery
from domain.exceptions import BreweryProviderException, InfrastructureException
from infrastructure.adapters.input.lambda_handler import flush_pending_events, lambda_handler, run_async

pytestmark = pytest.mark.integration


def _days_ago(days: int) -> str:
    return (date.today() - timedelta(days=days)).isoformat()


def _body(response):
    return json.loads(response['body']) if response.get('body') else None


def _create(mock_context, days_ago: int = 2000, temperature_c: int = 25, summary: str = 'Warm'):
    response = lambda_handler(
        build_create_event({'date': _days_ago(days_ago), 'temperatureC': temperature_c, 'summary': summary}),
        mock_context
    )
    assert response['statusCode'] == 201, response.get('body')
    return _body(response)['weatherForecastId']


class TestCreateWeatherForecastEndpoint:
    """Testes do endpoint POST /api/v1/weatherforecast"""

    def test_create_and_get(self, container, mock_context, brewery_provider):
        """REGRA: Criação retorna 201 + Location; GET devolve a previsão com °F"""
        response = lambda_handler(
            build_create_event({'date': _days_ago(2000), 'temperatureC': 25, 'summary': 'Warm'}),
            mock_context
        )

        assert response['statusCode'] == 201
        body = _body(response)
        forecast_id = body['weatherForecastId']
        assert uuid.UUID(body['eventId'])
        assert response_header(response, 'Location') == f'{WEATHER_FORECAST_PATH}/{forecast_id}'
        assert len(container.store) == 1001

        response = lambda_handler(build_get_event(forecast_id), mock_context)

        assert response['statusCode'] == 200
        assert _body(response) == {
            'id': forecast_id,
            'date': _days_ago(2000),
            'temperatureC': 25,
            'temperatureF': 77,
            'summaryId': 5,
            'summaryDescription': 'Warm'
        }

    def test_created_event_handler_runs_after_response(self, container, mock_context, brewery_provider):
        _create(mock_context)

        assert run_async(container.publisher.drain(timeout=1))
        brewery_provider.get_random_brewery.assert_awaited_once()
        assert container.publisher.pending == 0

    def test_slow_event_handler_does_not_delay_response(self, container, mock_context, brewery_provider):
        """REGRA: Handler de evento lento não atrasa o 201 da criação"""
        release = asyncio.Event()

        async def slow_lookup(*args, **kwargs):
            await release.wait()
            return Brewery(id='b-1', name='Dog Brewing')

        brewery_provider.get_random_brewery = AsyncMock(side_effect=slow_lookup)

        started = time.perf_counter()
        response = lambda_handler(
            build_create_event({'date': _days_ago(2000), 'temperatureC': 25, 'summary': 'Warm'}),
            mock_context
        )
        elapsed = time.perf_counter() - started

        assert response['statusCode'] == 201
        assert elapsed < 1.0
        assert container.publisher.pending == 1

        release.set()
        assert run_async(container.publisher.drain(timeout=1))
        brewery_provider.get_random_brewery.assert_awaited_once()

    def test_flush_window_waits_for_handlers_when_configured(self, container, mock_context, brewery_provider):
        _create(mock_context)

        assert flush_pending_events(timeout=1) is True
        brewery_provider.get_random_brewery.assert_awaited_once()

    def test_brewery_failure_does_not_affect_response(self, container, mock_context, brewery_provider):
        """REGRA: Falha no handler do evento não altera a resposta HTTP"""
        brewery_provider.get_random_brewery = AsyncMock(side_effect=BreweryProviderException("timeout"))

        forecast_id = _create(mock_context)

        assert lambda_handler(build_get_event(forecast_id), mock_context)['statusCode'] == 200

    def test_duplicate_date_is_conflict(self, container, mock_context):
        """REGRA: Data já cadastrada -> 409"""
        response = lambda_handler(
            build_create_event({'date': _days_ago(1), 'temperatureC': 20, 'summary': 'Mild'}),
            mock_context
        )

        assert response['statusCode'] == 409
        body = _body(response)
        assert body['errors'][0]['code'] == 'CONFLICT'
        assert len(container.store) == 1000

    def test_second_create_for_same_date_is_conflict(self, container, mock_context):
        _create(mock_context, days_ago=3000)

        response = lambda_handler(
            build_create_event({'date': _days_ago(3000), 'temperatureC': 1, 'summary': 'Chilly'}),
            mock_context
        )

        assert response['statusCode'] == 409

    @pytest.mark.parametrize("payload,field", [
        ({'date': _days_ago(2000), 'temperatureC': 101, 'summary': 'Hot'}, 'temperatureC'),
        ({'date': _days_ago(2000), 'temperatureC': 20, 'summary': 'Sunny'}, 'summary'),
        ({'date': (date.today() + timedelta(days=1)).isoformat(), 'temperatureC': 20, 'summary': 'Mild'}, 'date'),
        ({'date': '2024-02-30', 'temperatureC': 20, 'summary': 'Mild'}, 'date'),
        ({'date': _days_ago(2000), 'temperatureC': 'hot', 'summary': 'Mild'}, 'temperatureC'),
        ({'temperatureC': 20, 'summary': 'Mild'}, 'date'),
    ])
    def test_invalid_payload_is_bad_request(self, container, mock_context, payload, field):
        response = lambda_handler(build_create_event(payload), mock_context)

        assert response['statusCode'] == 400
        assert _body(response)['errors'][0]['field'] == field

    def test_non_object_body_is_bad_request(self, container, mock_context):
        response = lambda_handler(build_create_event('[1, 2, 3]'), mock_context)

        assert response['statusCode'] == 400
        assert _body(response)['errors'][0]['field'] == 'body'


class TestGetWeatherForecastEndpoints:
    """Testes dos endpoints GET"""

    def test_list_first_page(self, container, mock_context):
        """REGRA: 1000 previsões seed, pageSize 10 -> 100 páginas"""
        response = lambda_handler(build_list_event(pageNumber=1, pageSize=10), mock_context)

        assert response['statusCode'] == 200
        body = _body(response)
        assert body['totalItems'] == 1000
        assert body['totalPages'] == 100
        assert body['pageNumber'] == 1
        assert len(body['items']) == 10
        dates = [item['date'] for item in body['items']]
        assert dates == sorted(dates, reverse=True)
        assert dates[0] == _days_ago(1)

    def test_list_defaults(self, container, mock_context):
        body = _body(lambda_handler(build_list_event(), mock_context))

        assert body['pageSize'] == 10
        assert len(body['items']) == 10

    def test_list_filtered_by_summary(self, container, mock_context):
        body = _body(lambda_handler(build_list_event(summary='Hot', pageSize=100), mock_context))

        assert body['totalItems'] > 0
        assert {item['summaryDescription'] for item in body['items']} == {'Hot'}

    def test_list_filtered_by_temperature_and_date(self, container, mock_context):
        body = _body(lambda_handler(
            build_list_event(minTemp=0, maxTemp=20, minDate=_days_ago(100), maxDate=_days_ago(10), pageSize=100),
            mock_context
        ))

        for item in body['items']:
            assert 0 <= item['temperatureC'] <= 20
            assert _days_ago(100) <= item['date'] <= _days_ago(10)

    def test_page_beyond_end_is_empty(self, container, mock_context):
        body = _body(lambda_handler(build_list_event(pageNumber=500, pageSize=10), mock_context))

        assert body['items'] == []
        assert body['totalItems'] == 1000

    @pytest.mark.parametrize("query", [
        {'pageSize': 101},
        {'pageNumber': 0},
        {'minDate': _days_ago(1), 'maxDate': _days_ago(10)},
        {'summary': 'Sunny'},
        {'minDate': 'yesterday'},
    ])
    def test_invalid_query_is_bad_request(self, container, mock_context, query):
        assert lambda_handler(build_list_event(**query), mock_context)['statusCode'] == 400

    def test_non_ascii_digit_summary_is_field_error(self, container, mock_context):
        response = lambda_handler(build_list_event(summary='²'), mock_context)

        assert response['statusCode'] == 400
        assert _body(response)['errors'][0]['field'] == 'summary'

    def test_get_unknown_id_is_not_found(self, container, mock_context):
        response = lambda_handler(build_get_event(str(uuid.uuid4())), mock_context)

        assert response['statusCode'] == 404
        assert _body(response)['errors'][0]['code'] == 'NOT_FOUND'

    def test_get_malformed_id_is_bad_request(self, container, mock_context):
        assert lambda_handler(build_get_event('not-a-uuid'), mock_context)['statusCode'] == 400


class TestUpdateWeatherForecastEndpoint:
    """Testes do endpoint PUT /api/v1/weatherforecast"""

    def test_update_keeps_date(self, container, mock_context):
        """REGRA: PUT muda temperatura e summary, a data permanece"""
        forecast_id = _create(mock_context, days_ago=2500, temperature_c=10, summary='Cool')

        response = lambda_handler(
            build_update_event({'id': forecast_id, 'temperatureC': 38, 'summary': 'Sweltering'}),
            mock_context
        )

        assert response['statusCode'] == 204
        body = _body(lambda_handler(build_get_event(forecast_id), mock_context))
        assert body['date'] == _days_ago(2500)
        assert body['temperatureC'] == 38
        assert body['summaryDescription'] == 'Sweltering'

    def test_update_unknown_id_is_not_found(self, container, mock_context):
        response = lambda_handler(
            build_update_event({'id': str(uuid.uuid4()), 'temperatureC': 38, 'summary': 'Hot'}),
            mock_context
        )

        assert response['statusCode'] == 404

    def test_update_invalid_temperature(self, container, mock_context):
        forecast_id = _create(mock_context)

        response = lambda_handler(
            build_update_event({'id': forecast_id, 'temperatureC': -101, 'summary': 'Freezing'}),
            mock_context
        )

        assert response['statusCode'] == 400


class TestDeleteWeatherForecastEndpoint:
    """Testes do endpoint DELETE /api/v1/weatherforecast"""

    def test_delete_then_not_found(self, container, mock_context):
        """REGRA: Após excluir, novas exclusões e buscas retornam 404"""
        forecast_id = _create(mock_context)

        assert lambda_handler(build_delete_event({'id': forecast_id}), mock_context)['statusCode'] == 204
        assert lambda_handler(build_delete_event({'id': forecast_id}), mock_context)['statusCode'] == 404
        assert lambda_handler(build_delete_event({'id': forecast_id}), mock_context)['statusCode'] == 404
        assert lambda_handler(build_get_event(forecast_id), mock_context)['statusCode'] == 404
        assert len(container.store) == 1000

    def test_delete_without_id_is_bad_request(self, container, mock_context):
        assert lambda_handler(build_delete_event({}), mock_context)['statusCode'] == 400


class TestFailureModes:
    """Testes de falhas de infraestrutura e deadline"""

    def test_store_unavailable_returns_503(self, container, mock_context, monkeypatch):
        """REGRA: Falha transitória persistente após retries -> 503"""
        read = AsyncMock(side_effect=InfrastructureException("Store unavailable"))
        monkeypatch.setattr(container.store, 'read', read)

        response = lambda_handler(build_list_event(), mock_context)

        assert response['statusCode'] == 503
        assert read.await_count == 2

    def test_transient_failure_recovers_on_retry(self, container, mock_context, monkeypatch):
        original_read = container.store.read
        calls = []

        async def flaky_read():
            calls.append(True)
            if len(calls) == 1:
                raise InfrastructureException("Throttled")
            return await original_read()

        monkeypatch.setattr(container.store, 'read', flaky_read)

        response = lambda_handler(build_list_event(), mock_context)

        assert response['statusCode'] == 200

    def test_expired_deadline_returns_499(self, container):
        """REGRA: Sem tempo restante na invocação -> operação cancelada (499)"""
        response = lambda_handler(build_list_event(), MockContext(remaining_time_ms=100))

        assert response['statusCode'] == 499
