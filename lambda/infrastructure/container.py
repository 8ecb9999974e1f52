"""
Composition root - monta Flow, publisher e backends uma vez por processo
Reutilizado entre invocações Lambda (warm starts)
"""
from dataclasses import dataclass
from typing import Optional

from application.events import WeatherForecastCreatedEventHandler
from application.handlers import build_handler_registry
from application.ports.output.brewery_provider_port import IBreweryProvider
from domain.entities.weather_forecast import WeatherForecast
from domain.events import WeatherForecastCreatedEvent
from domain.exceptions import InfrastructureException
from infrastructure.adapters.output.providers import OpenBreweryDbProvider
from infrastructure.adapters.output.repositories import (
    DynamoDBUnitOfWork,
    DynamoDBWeatherForecastRepository,
    InMemoryUnitOfWork,
    InMemoryWeatherForecastRepository,
    InMemoryWeatherForecastStore,
)
from shared.config import settings
from shared.config.logger_config import get_logger
from shared.pipeline import EventPublisher, Flow, RequestScope

logger = get_logger(child=True)

SUPPORTED_BACKENDS = ('memory', 'dynamodb')


@dataclass
class Container:
    flow: Flow
    publisher: EventPublisher
    store: Optional[InMemoryWeatherForecastStore] = None


def _memory_scope_factory(store: InMemoryWeatherForecastStore):
    def create_scope() -> RequestScope:
        unit_of_work = InMemoryUnitOfWork(store)
        return RequestScope(InMemoryWeatherForecastRepository(store, unit_of_work), unit_of_work)
    return create_scope


def _dynamodb_scope_factory(table_name: str):
    def create_scope() -> RequestScope:
        unit_of_work = DynamoDBUnitOfWork(table_name)
        return RequestScope(DynamoDBWeatherForecastRepository(unit_of_work, table_name), unit_of_work)
    return create_scope


def build_container(
    backend: str = settings.REPOSITORY_BACKEND,
    seed_data: bool = settings.SEED_DATA_ENABLED,
    seed_amount: int = settings.SEED_DATA_AMOUNT,
    brewery_provider: Optional[IBreweryProvider] = None,
    retry_count: int = settings.PIPELINE_RETRY_COUNT,
    retry_backoff_seconds: float = settings.PIPELINE_RETRY_BACKOFF_SECONDS
) -> Container:
    """
    Monta as dependências da aplicação

    Raises:
        ValueError: Backend desconhecido
    """
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported repository backend '{backend}', expected one of {SUPPORTED_BACKENDS}")

    publisher = EventPublisher()
    publisher.subscribe(
        WeatherForecastCreatedEvent,
        WeatherForecastCreatedEventHandler(brewery_provider or OpenBreweryDbProvider())
    )

    store = None
    if backend == 'memory':
        store = InMemoryWeatherForecastStore()
        if seed_data and seed_amount > 0:
            seeded = store.seed(WeatherForecast.generate_fake_data(seed_amount))
            logger.info("Fake weather forecasts seeded", amount=seeded)
        scope_factory = _memory_scope_factory(store)
    else:
        scope_factory = _dynamodb_scope_factory(settings.DYNAMODB_TABLE_NAME)

    flow = Flow(
        handlers=build_handler_registry(),
        scope_factory=scope_factory,
        publisher=publisher,
        retry_count=retry_count,
        retry_backoff_seconds=retry_backoff_seconds,
        transient_exceptions=(InfrastructureException,)
    )

    logger.info("Container built", backend=backend, retry_count=retry_count)
    return Container(flow=flow, publisher=publisher, store=store)


_container: Optional[Container] = None


def get_container() -> Container:
    """Singleton do container (criado na primeira requisição)"""
    global _container
    if _container is None:
        _container = build_container()
    return _container


def set_container(container: Optional[Container]) -> None:
    """Substitui o container global (útil para testes)"""
    global _container
    _container = container
