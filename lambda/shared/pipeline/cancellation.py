"""
Cancellation Token - propagado por todas as chamadas assíncronas de uma requisição

Combina cancelamento explícito (cancel()) com deadline opcional
(derivado do tempo restante da invocação Lambda).
"""
import asyncio
import time
from typing import Awaitable, Optional, TypeVar

from shared.pipeline.exceptions import OperationCancelledException

T = TypeVar('T')


class CancellationToken:
    """
    Token de cancelamento por requisição

    Uso:
        token = CancellationToken(timeout_seconds=5)
        item = await token.guard(repository.first(spec, token))
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._event = asyncio.Event()
        self._reason: Optional[str] = None
        self._deadline = (
            time.monotonic() + timeout_seconds
            if timeout_seconds is not None
            else None
        )

    @classmethod
    def none(cls) -> 'CancellationToken':
        """Token que nunca cancela"""
        return cls()

    @property
    def is_cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def cancel(self, reason: str = "Operation cancelled") -> None:
        self._reason = reason
        self._event.set()

    def remaining(self) -> Optional[float]:
        """Segundos até o deadline (None = sem deadline)"""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledException(
                self._reason or "Operation cancelled",
                details={"deadline_exceeded": False}
            )
        if self.is_cancelled:
            raise OperationCancelledException(
                "Operation cancelled: request deadline exceeded",
                details={"deadline_exceeded": True}
            )

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """
        Aguarda a operação até completar, cancelar ou estourar o deadline

        Se o token já foi cancelado a operação nem começa. Se o cancelamento
        chega no meio, a task da operação é cancelada (aborta o I/O pendente)
        e OperationCancelledException é levantada no lugar de um resultado parcial.
        """
        if self.is_cancelled:
            # Evita "coroutine was never awaited"
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            self.raise_if_cancelled()

        operation = asyncio.ensure_future(awaitable)
        cancel_waiter = asyncio.ensure_future(self._event.wait())

        try:
            done, _ = await asyncio.wait(
                {operation, cancel_waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            operation.cancel()
            raise
        finally:
            cancel_waiter.cancel()

        if operation in done:
            return operation.result()

        operation.cancel()
        await asyncio.gather(operation, return_exceptions=True)

        self.raise_if_cancelled()
        # Deadline atingido exatamente na borda
        raise OperationCancelledException(
            "Operation cancelled: request deadline exceeded",
            details={"deadline_exceeded": True}
        )
