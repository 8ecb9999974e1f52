"""Weather Forecast Repository Port - acesso aos agregados WeatherForecast"""
from abc import ABC, abstractmethod
from typing import List, Optional

from domain.entities.weather_forecast import WeatherForecast
from domain.specifications.specification import Ordering, Specification
from domain.value_objects.pagination import Paginated, Pagination
from shared.pipeline.cancellation import CancellationToken


class IWeatherForecastRepository(ABC):
    """
    Interface do repositório de previsões

    Escritas (add/update/remove) só são registradas; ficam visíveis para
    leitura apenas depois do save_changes() da unit of work do mesmo escopo.
    """

    @abstractmethod
    async def add(self, weather_forecast: WeatherForecast, cancellation: Optional[CancellationToken] = None) -> None:
        pass

    @abstractmethod
    async def update(self, weather_forecast: WeatherForecast, cancellation: Optional[CancellationToken] = None) -> None:
        pass

    @abstractmethod
    async def remove(self, weather_forecast: WeatherForecast, cancellation: Optional[CancellationToken] = None) -> None:
        pass

    @abstractmethod
    async def first(
        self,
        specification: Specification[WeatherForecast],
        cancellation: Optional[CancellationToken] = None
    ) -> WeatherForecast:
        """
        Primeiro item que satisfaz a especificação

        Raises:
            WeatherForecastNotFoundException: Se nenhum item satisfaz
        """
        pass

    @abstractmethod
    async def first_or_none(
        self,
        specification: Specification[WeatherForecast],
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[WeatherForecast]:
        pass

    @abstractmethod
    async def any(
        self,
        specification: Specification[WeatherForecast],
        cancellation: Optional[CancellationToken] = None
    ) -> bool:
        pass

    @abstractmethod
    async def all(
        self,
        specification: Optional[Specification[WeatherForecast]] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> List[WeatherForecast]:
        pass

    @abstractmethod
    async def count(
        self,
        specification: Optional[Specification[WeatherForecast]] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> int:
        pass

    @abstractmethod
    async def search_paginated(
        self,
        specification: Specification[WeatherForecast],
        pagination: Pagination,
        ordering: Optional[Ordering] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> Paginated[WeatherForecast]:
        """
        Filtra, ordena e pagina

        Returns:
            Janela da página com totais calculados sobre o conjunto filtrado
        """
        pass
