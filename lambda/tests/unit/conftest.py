"""
Configurações e fixtures compartilhadas para testes unitários
"""
from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from application.handlers import build_handler_registry
from application.ports.output.brewery_provider_port import Brewery
from domain.entities.weather_forecast import WeatherForecast
from domain.value_objects.summary import Summary
from infrastructure.adapters.output.repositories import (
    InMemoryUnitOfWork,
    InMemoryWeatherForecastRepository,
    InMemoryWeatherForecastStore,
)
from shared.pipeline import EventPublisher, Flow, RequestScope


@pytest.fixture
def make_forecast():
    """
    Factory fixture para criar WeatherForecast com valores padrão

    Usage:
        def test_something(make_forecast):
            forecast = make_forecast(days_ago=3, temperature_c=30)
    """
    def _make(
        days_ago: int = 1,
        temperature_c: int = 25,
        summary: Summary = Summary.WARM
    ) -> WeatherForecast:
        return WeatherForecast.create(date.today() - timedelta(days=days_ago), temperature_c, summary)

    return _make


@pytest.fixture
def store():
    """Store em memória vazio"""
    return InMemoryWeatherForecastStore()


@pytest.fixture
def scope_factory(store):
    """Fábrica de escopos (repositório + unit of work) sobre o store"""
    def _create_scope() -> RequestScope:
        unit_of_work = InMemoryUnitOfWork(store)
        return RequestScope(InMemoryWeatherForecastRepository(store, unit_of_work), unit_of_work)

    return _create_scope


@pytest.fixture
def scope(scope_factory):
    return scope_factory()


@pytest.fixture
def brewery_provider():
    """Provider de cervejarias mockado"""
    provider = MagicMock()
    provider.get_random_brewery = AsyncMock(return_value=Brewery(id='b-1', name='Dog Brewing'))
    return provider


@pytest.fixture
def publisher():
    return EventPublisher()


@pytest.fixture
def flow(scope_factory, publisher):
    """Flow com os handlers reais, sem retry"""
    return Flow(
        handlers=build_handler_registry(),
        scope_factory=scope_factory,
        publisher=publisher,
        retry_count=0,
        retry_backoff_seconds=0
    )
