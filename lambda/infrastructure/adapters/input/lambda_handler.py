"""
Input Adapter: Lambda Handler HTTP (100% ASYNC)
Presentation Layer: traduz requisições HTTP em commands/queries e executa o pipeline
"""
import json
import asyncio
from typing import Any, Optional

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig, Response
from aws_lambda_powertools.utilities.typing import LambdaContext

# Application Layer - Binding e DTOs
from application.dtos.requests import (
    bind_create_command,
    bind_delete_command,
    bind_get_all_query,
    bind_get_by_id_query,
    bind_update_command,
    parse_json_body,
)
from application.dtos.responses import WeatherForecastResponse

# Domain Layer
from domain.constants import HttpStatus
from domain.events import WeatherForecastCreatedEvent
from domain.exceptions import (
    DomainException,
    InfrastructureException,
    WeatherForecastNotFoundException,
)

# Infrastructure Layer
from infrastructure.adapters.input.exception_handler_service import ExceptionHandlerService
from infrastructure.container import get_container

# Shared Layer
from shared.config.settings import (
    API_BASE_PATH,
    CORS_ORIGIN,
    EVENT_FLUSH_TIMEOUT_SECONDS,
    REQUEST_TIMEOUT_MARGIN_MS,
)
from shared.config.logger_config import get_logger
from shared.pipeline import CancellationToken
from shared.pipeline.exceptions import (
    OperationCancelledException,
    PipelineConfigurationException,
    ValidationException,
)

# Configurar Logger com service name do DD_SERVICE
logger = get_logger()

app = APIGatewayRestResolver(cors=CORSConfig(allow_origin=CORS_ORIGIN))

WEATHER_FORECAST_ROUTE = f"{API_BASE_PATH}/weatherforecast"

# =============================
# Global Event Loop (persistente entre invocações Lambda)
# =============================
_global_event_loop = None

# =============================
# Exception Handlers (Delegados para ExceptionHandlerService)
# =============================

exception_service = ExceptionHandlerService()

app.exception_handler(ValidationException)(exception_service.handle_validation_error)
app.exception_handler(WeatherForecastNotFoundException)(exception_service.handle_weather_forecast_not_found)
app.exception_handler(OperationCancelledException)(exception_service.handle_operation_cancelled)
app.exception_handler(InfrastructureException)(exception_service.handle_infrastructure_error)
app.exception_handler(PipelineConfigurationException)(exception_service.handle_pipeline_configuration_error)
app.exception_handler(DomainException)(exception_service.handle_domain_error)
app.exception_handler(ValueError)(exception_service.handle_value_error)
app.exception_handler(Exception)(exception_service.handle_unexpected_error)


def build_cancellation_token(context: Any) -> CancellationToken:
    """
    Token com deadline = tempo restante da invocação - margem de segurança

    Sem contexto Lambda (servidor local) o token nunca expira.
    """
    get_remaining_time = getattr(context, 'get_remaining_time_in_millis', None)
    if not callable(get_remaining_time):
        return CancellationToken.none()

    remaining_ms = max(get_remaining_time() - REQUEST_TIMEOUT_MARGIN_MS, 0)
    return CancellationToken(timeout_seconds=remaining_ms / 1000)


def _cancellation_token() -> CancellationToken:
    return build_cancellation_token(app.lambda_context)


# =============================
# Routes (Async execution with sync wrappers for AWS Powertools compatibility)
# =============================

@app.get(WEATHER_FORECAST_ROUTE)
def get_weather_forecasts_route():
    """
    GET /api/v1/weatherforecast?summary=Warm&minDate=2024-01-01&maxTemp=30&pageNumber=1&pageSize=10

    Returns paginated forecasts ordered by date (newest first)
    """
    query = bind_get_all_query(app.current_event.query_string_parameters)
    pipeline = get_container().flow.start(query, _cancellation_token()).validate().handle()

    page = run_async(pipeline.execute())

    return page.to_dict(WeatherForecastResponse.to_dict)


@app.get(f"{WEATHER_FORECAST_ROUTE}/<weather_forecast_id>")
def get_weather_forecast_by_id_route(weather_forecast_id: str):
    """
    GET /api/v1/weatherforecast/{id}

    Returns a single forecast
    """
    query = bind_get_by_id_query(weather_forecast_id)
    pipeline = get_container().flow.start(query, _cancellation_token()).validate().handle()

    weather_forecast = run_async(pipeline.execute())

    return weather_forecast.to_dict()


@app.post(WEATHER_FORECAST_ROUTE)
def create_weather_forecast_route():
    """
    POST /api/v1/weatherforecast
    Body: { "date": "2024-01-15", "temperatureC": 25, "summary": "Warm" }

    Returns 201 with the created event and the Location of the new forecast.
    Event subscribers run after the response is built (fire-and-continue).
    """
    command = bind_create_command(parse_json_body(app.current_event.decoded_body))
    pipeline = (
        get_container().flow.start(command, _cancellation_token())
        .validate()
        .tap(lambda _: logger.debug("Create request validated with success"))
        .handle()
        .transform(lambda weather_forecast_id: WeatherForecastCreatedEvent(weather_forecast_id=weather_forecast_id))
        .publish()
    )

    event = run_async(pipeline.execute())

    return Response(
        status_code=HttpStatus.CREATED,
        content_type="application/json",
        body=json.dumps(event.to_dict()),
        headers={"Location": f"{WEATHER_FORECAST_ROUTE}/{event.weather_forecast_id}"}
    )


@app.put(WEATHER_FORECAST_ROUTE)
def update_weather_forecast_route():
    """
    PUT /api/v1/weatherforecast
    Body: { "id": "...", "temperatureC": 25, "summary": "Warm" }
    """
    command = bind_update_command(parse_json_body(app.current_event.decoded_body))
    pipeline = get_container().flow.start(command, _cancellation_token()).validate().handle()

    run_async(pipeline.execute())

    return Response(status_code=HttpStatus.NO_CONTENT, content_type="application/json", body="")


@app.delete(WEATHER_FORECAST_ROUTE)
def delete_weather_forecast_route():
    """
    DELETE /api/v1/weatherforecast
    Body: { "id": "..." }
    """
    command = bind_delete_command(parse_json_body(app.current_event.decoded_body))
    pipeline = get_container().flow.start(command, _cancellation_token()).validate().handle()

    run_async(pipeline.execute())

    return Response(status_code=HttpStatus.NO_CONTENT, content_type="application/json", body="")


# =============================
# Lambda Handler (100% ASYNC)
# =============================

@logger.inject_lambda_context()
def lambda_handler(event, context: LambdaContext):
    """
    AWS Lambda main function

    AWS Lambda Powertools manages:
    - REST routing with exception handlers
    - CORS
    - JSON serialization
    - Structured logging

    Available routes:
    - GET    /api/v1/weatherforecast?summary=&minDate=&maxDate=&minTemp=&maxTemp=&pageNumber=&pageSize=
    - GET    /api/v1/weatherforecast/{id}
    - POST   /api/v1/weatherforecast
    - PUT    /api/v1/weatherforecast
    - DELETE /api/v1/weatherforecast
    """
    headers = event.get('headers', {}) or {}
    request_context = event.get('requestContext', {}) or {}
    identity = request_context.get('identity', {}) or {}

    logger.info(
        "Requisição Lambda recebida",
        rota=event.get('path', 'N/A'),
        metodo=event.get('httpMethod', 'N/A'),
        request_id=getattr(context, 'aws_request_id', 'N/A'),
        source_ip=identity.get('sourceIp', 'N/A')
    )

    response = app.resolve(event, context)

    flush_pending_events()

    status_code = response.get('statusCode', 'N/A')
    logger.info(
        "Requisição Lambda concluída",
        status_code=status_code,
        sucesso=isinstance(status_code, int) and status_code < 400
    )

    return response


def flush_pending_events(timeout: Optional[float] = None) -> bool:
    """
    Espera opcional pelos handlers de eventos pendentes

    Com timeout 0 (padrão) retorna na hora: as tasks continuam no loop
    global e avançam sempre que uma próxima invocação roda o loop.
    """
    timeout = EVENT_FLUSH_TIMEOUT_SECONDS if timeout is None else timeout
    publisher = get_container().publisher
    if not publisher.pending:
        return True
    if timeout <= 0:
        logger.debug("Event handlers left running on the event loop", pending=publisher.pending)
        return False
    return run_async(publisher.drain(timeout=timeout))


def get_or_create_event_loop():
    """
    Retorna event loop global persistente

    Clientes aioboto3/aiohttp e tasks de eventos vivem nesse loop
    e permanecem válidos entre invocações (warm starts).
    """
    global _global_event_loop

    if _global_event_loop is not None and not _global_event_loop.is_closed():
        return _global_event_loop

    _global_event_loop = asyncio.new_event_loop()
    asyncio.set_event_loop(_global_event_loop)

    return _global_event_loop


def run_async(coro):
    """
    Executa coroutine no event loop global (NÃO fecha o loop)

    Args:
        coro: Coroutine a ser executada

    Returns:
        Resultado da coroutine
    """
    loop = get_or_create_event_loop()
    return loop.run_until_complete(coro)
