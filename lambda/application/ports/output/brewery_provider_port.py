"""Brewery Provider Port - cervejarias para o evento de criação"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from shared.pipeline.cancellation import CancellationToken


@dataclass(frozen=True)
class Brewery:
    id: str
    name: str


class IBreweryProvider(ABC):

    @abstractmethod
    async def get_random_brewery(self, cancellation: Optional[CancellationToken] = None) -> Brewery:
        """
        Busca uma cervejaria aleatória

        Raises:
            BreweryProviderException: Se o provider falhar ou não retornar nada
        """
        pass
