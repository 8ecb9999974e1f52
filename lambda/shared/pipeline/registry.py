"""
Handler Registry - mapa explícito tipo de requisição -> handler
Montado no startup; verify() garante exatamente um handler por tipo.
"""
from typing import Any, Awaitable, Callable, Dict, Iterable

from shared.pipeline.exceptions import (
    AmbiguousHandlerException,
    DuplicateHandlerException,
    HandlerNotFoundException,
)

Handler = Callable[..., Awaitable[Any]]


class HandlerRegistry:
    """Resolve o handler de uma requisição pelo seu tipo em tempo de execução"""

    def __init__(self):
        self._handlers: Dict[type, Handler] = {}

    def register(self, request_type: type, handler: Handler) -> 'HandlerRegistry':
        if request_type in self._handlers:
            raise DuplicateHandlerException(
                f"A handler is already registered for {request_type.__name__}",
                details={"request_type": request_type.__name__}
            )
        self._handlers[request_type] = handler
        return self

    def resolve(self, request: Any) -> Handler:
        matches = [
            handler
            for request_type, handler in self._handlers.items()
            if isinstance(request, request_type)
        ]

        if not matches:
            raise HandlerNotFoundException(
                f"No handler registered for {type(request).__name__}",
                details={"request_type": type(request).__name__}
            )

        if len(matches) > 1:
            raise AmbiguousHandlerException(
                f"{len(matches)} handlers match {type(request).__name__}",
                details={"request_type": type(request).__name__, "matches": len(matches)}
            )

        return matches[0]

    def verify(self, request_types: Iterable[type]) -> None:
        """Falha no startup se algum tipo não tiver exatamente um handler"""
        for request_type in request_types:
            matches = [
                registered
                for registered in self._handlers
                if issubclass(request_type, registered)
            ]
            if len(matches) != 1:
                exception_class = HandlerNotFoundException if not matches else AmbiguousHandlerException
                raise exception_class(
                    f"{request_type.__name__} must match exactly one handler, found {len(matches)}",
                    details={"request_type": request_type.__name__, "matches": len(matches)}
                )

    def __contains__(self, request_type: type) -> bool:
        return request_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
