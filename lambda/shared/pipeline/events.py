"""
Event Publisher - fire-and-continue para eventos de domínio

publish() agenda uma task desacoplada por handler inscrito e retorna na hora.
Falhas dos handlers são capturadas na fronteira do evento: logadas, marcadas
no span do ddtrace e contadas; nunca propagam para quem publicou.
"""
import asyncio
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from ddtrace import tracer

from shared.config.logger_config import get_logger
from shared.pipeline.cancellation import CancellationToken

logger = get_logger(child=True)

EventHandler = Callable[[Any, CancellationToken], Awaitable[None]]


class EventPublisher:
    """Dispatcher in-process de eventos de domínio"""

    def __init__(self):
        self._subscribers: Dict[type, List[EventHandler]] = defaultdict(list)
        self._pending: Set[asyncio.Task] = set()
        self.failed_events = 0

    def subscribe(self, event_type: type, handler: EventHandler) -> 'EventPublisher':
        self._subscribers[event_type].append(handler)
        return self

    def handlers_for(self, event: Any) -> List[EventHandler]:
        return [
            handler
            for event_type, handlers in self._subscribers.items()
            if isinstance(event, event_type)
            for handler in handlers
        ]

    @property
    def pending(self) -> int:
        return len(self._pending)

    def publish(self, event: Any, cancellation: Optional[CancellationToken] = None) -> List[asyncio.Task]:
        """
        Agenda os handlers do evento sem aguardá-los

        Deve ser chamado de dentro de um event loop em execução.
        """
        cancellation = cancellation or CancellationToken.none()
        handlers = self.handlers_for(event)

        if not handlers:
            logger.debug("No subscribers for event", event_type=type(event).__name__)
            return []

        loop = asyncio.get_running_loop()
        tasks = []
        for handler in handlers:
            task = loop.create_task(self._dispatch(handler, event, cancellation))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            tasks.append(task)

        logger.info(
            "Event published",
            event_type=type(event).__name__,
            subscribers=len(tasks)
        )
        return tasks

    async def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Aguarda as tasks pendentes (até timeout)

        Returns:
            True se não sobrou nada pendente
        """
        if not self._pending:
            return True

        _, still_pending = await asyncio.wait(set(self._pending), timeout=timeout)
        if still_pending:
            logger.warning("Event handlers still running after drain", pending=len(still_pending))
        return not still_pending

    async def _dispatch(self, handler: EventHandler, event: Any, cancellation: CancellationToken) -> None:
        handler_name = getattr(handler, '__qualname__', type(handler).__name__)
        event_type = type(event).__name__

        with tracer.trace("event.handle", resource=handler_name) as span:
            span.set_tag("event.type", event_type)
            try:
                await handler(event, cancellation)
            except Exception as exc:
                self.failed_events += 1
                span.set_exc_info(type(exc), exc, exc.__traceback__)
                logger.error(
                    "Event handler failed",
                    event_type=event_type,
                    handler=handler_name,
                    error=str(exc),
                    exc_info=True
                )
