"""
In-Memory Repository - backend padrão
Store único por processo (sobrevive entre invocações em warm starts)
"""
import asyncio
import copy
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ddtrace import tracer

from domain.entities.weather_forecast import WeatherForecast
from domain.exceptions import WeatherForecastNotFoundException
from infrastructure.adapters.output.repositories.base import (
    ChangeType,
    StagedChange,
    StagedUnitOfWork,
    StagedWeatherForecastRepository,
)
from shared.pipeline.cancellation import CancellationToken


class InMemoryWeatherForecastStore:
    """
    Estado commitado

    Leituras devolvem cópias: mudanças feitas por um handler só aparecem
    depois do commit da unit of work.
    """

    def __init__(self):
        self._items: Dict[UUID, WeatherForecast] = {}
        self._lock = asyncio.Lock()

    def seed(self, weather_forecasts: Iterable[WeatherForecast]) -> int:
        count = 0
        for weather_forecast in weather_forecasts:
            self._items[weather_forecast.weather_forecast_id] = copy.copy(weather_forecast)
            count += 1
        return count

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    async def read(self) -> List[WeatherForecast]:
        async with self._lock:
            return [copy.copy(item) for item in self._items.values()]

    async def apply(self, changes: List[StagedChange]) -> int:
        """Aplica todas as mudanças ou nenhuma"""
        async with self._lock:
            items = dict(self._items)

            for change in changes:
                forecast_id = change.weather_forecast.weather_forecast_id

                if change.change_type is not ChangeType.ADD and forecast_id not in items:
                    raise WeatherForecastNotFoundException(
                        "Weather forecast not found",
                        details={"id": str(forecast_id), "operation": change.change_type.value}
                    )

                if change.change_type is ChangeType.REMOVE:
                    del items[forecast_id]
                else:
                    items[forecast_id] = copy.copy(change.weather_forecast)

            self._items = items
            return len(changes)


class InMemoryUnitOfWork(StagedUnitOfWork):

    def __init__(self, store: InMemoryWeatherForecastStore):
        super().__init__()
        self.store = store

    @tracer.wrap(resource="memory.save_changes")
    async def _commit(self, changes: List[StagedChange], cancellation: Optional[CancellationToken]) -> int:
        return await self.store.apply(changes)


class InMemoryWeatherForecastRepository(StagedWeatherForecastRepository):

    def __init__(self, store: InMemoryWeatherForecastStore, unit_of_work: InMemoryUnitOfWork):
        super().__init__(unit_of_work)
        self.store = store

    async def _load(self, cancellation: Optional[CancellationToken]) -> List[WeatherForecast]:
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        return await self.store.read()
