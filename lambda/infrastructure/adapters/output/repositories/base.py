"""
Base dos repositórios: escritas registradas na unit of work, leituras
avaliando a Specification sobre o estado já commitado
"""
from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from application.ports.output.unit_of_work_port import IUnitOfWork
from application.ports.output.weather_forecast_repository_port import IWeatherForecastRepository
from domain.entities.weather_forecast import WeatherForecast
from domain.exceptions import WeatherForecastNotFoundException
from domain.specifications.specification import Ordering, Specification
from domain.value_objects.pagination import Paginated, Pagination, paginate
from shared.config.logger_config import get_logger
from shared.pipeline.cancellation import CancellationToken

logger = get_logger(child=True)


class ChangeType(Enum):
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass(frozen=True)
class StagedChange:
    change_type: ChangeType
    weather_forecast: WeatherForecast


class StagedUnitOfWork(IUnitOfWork):
    """Acumula as mudanças de um escopo e as entrega de uma vez em _commit()"""

    def __init__(self):
        self._changes: List[StagedChange] = []

    @property
    def pending(self) -> List[StagedChange]:
        return list(self._changes)

    def stage(self, change_type: ChangeType, weather_forecast: WeatherForecast) -> None:
        self._changes.append(StagedChange(change_type, weather_forecast))

    async def save_changes(self, cancellation: Optional[CancellationToken] = None) -> int:
        if cancellation is not None:
            cancellation.raise_if_cancelled()

        if not self._changes:
            return 0

        changes = list(self._changes)
        affected = await self._commit(changes, cancellation)
        self._changes.clear()

        logger.debug("Changes saved", affected=affected)
        return affected

    @abstractmethod
    async def _commit(self, changes: List[StagedChange], cancellation: Optional[CancellationToken]) -> int:
        pass


class StagedWeatherForecastRepository(IWeatherForecastRepository):
    """
    Implementação comum do port

    Subclasses só sabem carregar o estado commitado (_load); filtro,
    ordenação e paginação acontecem aqui sobre a Specification.
    """

    def __init__(self, unit_of_work: StagedUnitOfWork):
        self.unit_of_work = unit_of_work

    @abstractmethod
    async def _load(self, cancellation: Optional[CancellationToken]) -> List[WeatherForecast]:
        pass

    async def add(self, weather_forecast: WeatherForecast, cancellation: Optional[CancellationToken] = None) -> None:
        self.unit_of_work.stage(ChangeType.ADD, weather_forecast)

    async def update(self, weather_forecast: WeatherForecast, cancellation: Optional[CancellationToken] = None) -> None:
        self.unit_of_work.stage(ChangeType.UPDATE, weather_forecast)

    async def remove(self, weather_forecast: WeatherForecast, cancellation: Optional[CancellationToken] = None) -> None:
        self.unit_of_work.stage(ChangeType.REMOVE, weather_forecast)

    async def first(
        self,
        specification: Specification[WeatherForecast],
        cancellation: Optional[CancellationToken] = None
    ) -> WeatherForecast:
        weather_forecast = await self.first_or_none(specification, cancellation)
        if weather_forecast is None:
            raise WeatherForecastNotFoundException("Weather forecast not found")
        return weather_forecast

    async def first_or_none(
        self,
        specification: Specification[WeatherForecast],
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[WeatherForecast]:
        items = await self._load(cancellation)
        return next(iter(specification.apply(items)), None)

    async def any(
        self,
        specification: Specification[WeatherForecast],
        cancellation: Optional[CancellationToken] = None
    ) -> bool:
        return await self.first_or_none(specification, cancellation) is not None

    async def all(
        self,
        specification: Optional[Specification[WeatherForecast]] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> List[WeatherForecast]:
        items = await self._load(cancellation)
        if specification is None:
            return items
        return list(specification.apply(items))

    async def count(
        self,
        specification: Optional[Specification[WeatherForecast]] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> int:
        return len(await self.all(specification, cancellation))

    async def search_paginated(
        self,
        specification: Specification[WeatherForecast],
        pagination: Pagination,
        ordering: Optional[Ordering] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> Paginated[WeatherForecast]:
        matches = await self.all(specification, cancellation)
        if ordering is not None:
            matches = ordering.apply(matches)
        return paginate(matches, pagination)
