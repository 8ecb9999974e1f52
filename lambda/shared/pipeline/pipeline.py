"""
Pipeline Executor
validate -> tap -> handle -> transform -> publish para uma requisição

Encadear etapas só descreve o pipeline; nada roda até execute().
Uso:
    result = await (
        flow.start(command, cancellation)
        .validate()
        .tap(lambda _: logger.debug("Request validated with success"))
        .handle()
        .transform(WeatherForecastCreatedEvent)
        .publish()
        .execute()
    )
"""
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Type

from ddtrace import tracer
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from domain.exceptions import InfrastructureException
from shared.config.logger_config import get_logger
from shared.pipeline.cancellation import CancellationToken
from shared.pipeline.events import EventPublisher
from shared.pipeline.exceptions import PipelineConfigurationException, ValidationException
from shared.pipeline.registry import HandlerRegistry
from shared.pipeline.validation import Validator

logger = get_logger(child=True)

RETRY_MAX_WAIT_SECONDS = 2.0

Stage = Callable[[Any, 'RequestScope'], Awaitable[Any]]


@dataclass
class RequestScope:
    """Dependências com escopo de uma tentativa de execução"""
    repository: Any
    unit_of_work: Any


class Flow:
    """
    Mediator montado no startup

    Guarda o registry de handlers, o validador, o publisher de eventos,
    a fábrica de escopos (repositório + unit of work por tentativa)
    e a política de retry para falhas transitórias de infraestrutura.
    """

    def __init__(
        self,
        handlers: HandlerRegistry,
        scope_factory: Callable[[], RequestScope],
        validator: Optional[Validator] = None,
        publisher: Optional[EventPublisher] = None,
        retry_count: int = 3,
        retry_backoff_seconds: float = 0.1,
        transient_exceptions: Tuple[Type[BaseException], ...] = (InfrastructureException,)
    ):
        self.handlers = handlers
        self.scope_factory = scope_factory
        self.validator = validator or Validator()
        self.publisher = publisher or EventPublisher()
        self.retry_count = max(retry_count, 0)
        self.retry_backoff_seconds = retry_backoff_seconds
        self.transient_exceptions = transient_exceptions

    def start(self, request: Any, cancellation: Optional[CancellationToken] = None) -> 'Pipeline':
        return Pipeline(self, request, cancellation or CancellationToken.none())

    def retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception_type(self.transient_exceptions),
            stop=stop_after_attempt(self.retry_count + 1),
            wait=wait_exponential(multiplier=self.retry_backoff_seconds, max=RETRY_MAX_WAIT_SECONDS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )


class Pipeline:
    """Descrição das etapas de uma requisição; execute() é o único passo com efeitos"""

    def __init__(self, flow: Flow, request: Any, cancellation: CancellationToken):
        self._flow = flow
        self.request = request
        self.cancellation = cancellation
        self._stages: List[Tuple[str, Stage]] = []

    @property
    def stages(self) -> List[str]:
        return [name for name, _ in self._stages]

    def validate(self) -> 'Pipeline':
        async def stage(value: Any, scope: RequestScope) -> Any:
            result = await self._flow.validator.validate(self.request, scope.repository, self.cancellation)
            if not result.is_valid:
                logger.info(
                    "Request rejected by validation",
                    request_type=type(self.request).__name__,
                    status_code=result.status_code,
                    errors=[error.to_dict() for error in result.errors]
                )
                raise ValidationException(result)
            return value

        return self._add("validate", stage)

    def tap(self, callback: Callable[[Any], Any]) -> 'Pipeline':
        """Observa o valor corrente sem alterá-lo (callback sync ou async)"""
        async def stage(value: Any, scope: RequestScope) -> Any:
            outcome = callback(value)
            if inspect.isawaitable(outcome):
                await outcome
            return value

        return self._add("tap", stage)

    def handle(self) -> 'Pipeline':
        if "validate" not in self.stages:
            raise PipelineConfigurationException(
                "handle() requires a validate() stage before it",
                details={"request_type": type(self.request).__name__, "stages": self.stages}
            )

        async def stage(value: Any, scope: RequestScope) -> Any:
            handler = self._flow.handlers.resolve(self.request)
            return await self.cancellation.guard(
                handler(self.request, scope.repository, scope.unit_of_work, self.cancellation)
            )

        return self._add("handle", stage)

    def transform(self, transform: Callable[[Any], Any]) -> 'Pipeline':
        async def stage(value: Any, scope: RequestScope) -> Any:
            outcome = transform(value)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            return outcome

        return self._add("transform", stage)

    def publish(self) -> 'Pipeline':
        async def stage(value: Any, scope: RequestScope) -> Any:
            self._flow.publisher.publish(value, self.cancellation)
            return value

        return self._add("publish", stage)

    async def execute(self) -> Any:
        request_type = type(self.request).__name__

        with tracer.trace("pipeline.execute", resource=request_type) as span:
            span.set_tag("pipeline.stages", ",".join(self.stages))

            async for attempt in self._flow.retrying():
                with attempt:
                    attempt_number = attempt.retry_state.attempt_number
                    if attempt_number > 1:
                        logger.info("Retrying pipeline", request_type=request_type, attempt=attempt_number)
                    result = await self._run_once()

            logger.debug("Pipeline executed", request_type=request_type, stages=self.stages)
            return result

    async def _run_once(self) -> Any:
        scope = self._flow.scope_factory()
        value: Any = self.request

        for _, stage in self._stages:
            self.cancellation.raise_if_cancelled()
            value = await stage(value, scope)

        return value

    def _add(self, name: str, stage: Stage) -> 'Pipeline':
        self._stages.append((name, stage))
        return self
