"""Unit of Work Port - commit único das escritas de uma requisição"""
from abc import ABC, abstractmethod
from typing import Optional

from shared.pipeline.cancellation import CancellationToken


class IUnitOfWork(ABC):

    @abstractmethod
    async def save_changes(self, cancellation: Optional[CancellationToken] = None) -> int:
        """
        Persiste as escritas registradas de forma atômica

        Returns:
            Número de itens afetados
        """
        pass
