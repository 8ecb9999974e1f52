"""
DynamoDB Repository - backend opcional (REPOSITORY_BACKEND=dynamodb)

Estrutura do item:
{
    "id": "7f3c...",            # partition key
    "date": "2024-01-15",
    "temperatureC": 25,
    "summary": 5,
    "createdAt": "2024-01-16T10:00:00+00:00",
    "updatedAt": "2024-01-17T08:30:00+00:00"   # opcional
}
"""
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from ddtrace import tracer

from domain.entities.weather_forecast import WeatherForecast
from domain.exceptions import InfrastructureException, WeatherForecastNotFoundException
from domain.value_objects.summary import Summary
from infrastructure.adapters.output.http.dynamodb_client_manager import (
    DynamoDBClientManager,
    get_dynamodb_client_manager,
)
from infrastructure.adapters.output.repositories.base import (
    ChangeType,
    StagedChange,
    StagedUnitOfWork,
    StagedWeatherForecastRepository,
)
from shared.config.logger_config import get_logger
from shared.config.settings import DYNAMODB_TABLE_NAME
from shared.pipeline.cancellation import CancellationToken

logger = get_logger(child=True)

# Limite do TransactWriteItems
TRANSACTION_CHUNK_SIZE = 100

# Erros em que vale tentar de novo
TRANSIENT_ERROR_CODES = {
    'ProvisionedThroughputExceededException',
    'ThrottlingException',
    'RequestLimitExceeded',
    'InternalServerError',
    'ServiceUnavailable',
    'TransactionConflictException',
}


def to_item(weather_forecast: WeatherForecast) -> Dict[str, Dict[str, str]]:
    item = {
        'id': {'S': str(weather_forecast.weather_forecast_id)},
        'date': {'S': weather_forecast.date.isoformat()},
        'temperatureC': {'N': str(weather_forecast.temperature_c)},
        'summary': {'N': str(int(weather_forecast.summary))},
        'createdAt': {'S': weather_forecast.created_at.isoformat()},
    }
    if weather_forecast.updated_at is not None:
        item['updatedAt'] = {'S': weather_forecast.updated_at.isoformat()}
    return item


def from_item(item: Dict[str, Dict[str, str]]) -> WeatherForecast:
    updated_at = item.get('updatedAt', {}).get('S')
    return WeatherForecast(
        weather_forecast_id=uuid.UUID(item['id']['S']),
        date=date.fromisoformat(item['date']['S']),
        temperature_c=int(item['temperatureC']['N']),
        summary=Summary.from_value(int(item['summary']['N'])),
        created_at=datetime.fromisoformat(item['createdAt']['S']),
        updated_at=datetime.fromisoformat(updated_at) if updated_at else None
    )


def _translate(operation: str, error: Exception) -> Exception:
    """
    Traduz erros do botocore para exceções do domínio

    Transitórios (throttling, conexão) viram InfrastructureException e são
    retentados pelo pipeline; os demais ClientError seguem inalterados.
    """
    if isinstance(error, ClientError):
        code = error.response.get('Error', {}).get('Code', '')
        if code in TRANSIENT_ERROR_CODES:
            return InfrastructureException(
                f"DynamoDB {operation} failed transiently: {code}",
                details={"operation": operation, "code": code}
            )
        # Condição attribute_exists falhou: o item sumiu entre a leitura e o commit
        if code == 'TransactionCanceledException' and any(
            reason.get('Code') == 'ConditionalCheckFailed'
            for reason in error.response.get('CancellationReasons', [])
        ):
            return WeatherForecastNotFoundException(
                "Weather forecast not found",
                details={"operation": operation, "code": code}
            )
        return error

    return InfrastructureException(
        f"DynamoDB {operation} failed: {str(error)}",
        details={"operation": operation, "error_type": type(error).__name__}
    )


class DynamoDBUnitOfWork(StagedUnitOfWork):

    def __init__(
        self,
        table_name: str = DYNAMODB_TABLE_NAME,
        client_manager: Optional[DynamoDBClientManager] = None
    ):
        super().__init__()
        self.table_name = table_name
        self.client_manager = client_manager or get_dynamodb_client_manager()

    def _transact_item(self, change: StagedChange) -> Dict[str, Any]:
        if change.change_type is ChangeType.REMOVE:
            return {
                'Delete': {
                    'TableName': self.table_name,
                    'Key': {'id': {'S': str(change.weather_forecast.weather_forecast_id)}},
                    'ConditionExpression': 'attribute_exists(id)'
                }
            }

        condition = 'attribute_not_exists(id)' if change.change_type is ChangeType.ADD else 'attribute_exists(id)'
        return {
            'Put': {
                'TableName': self.table_name,
                'Item': to_item(change.weather_forecast),
                'ConditionExpression': condition
            }
        }

    @tracer.wrap(resource="dynamodb.save_changes")
    async def _commit(self, changes: List[StagedChange], cancellation: Optional[CancellationToken]) -> int:
        transact_items = [self._transact_item(change) for change in changes]

        try:
            client = await self.client_manager.get_client()
            for start in range(0, len(transact_items), TRANSACTION_CHUNK_SIZE):
                if cancellation is not None:
                    cancellation.raise_if_cancelled()
                await client.transact_write_items(
                    TransactItems=transact_items[start:start + TRANSACTION_CHUNK_SIZE]
                )
        except (ClientError, BotoCoreError) as e:
            logger.warning("DynamoDB commit failed", table=self.table_name, error=str(e))
            translated = _translate("transact_write_items", e)
            if translated is e:
                raise
            raise translated from e

        return len(transact_items)


class DynamoDBWeatherForecastRepository(StagedWeatherForecastRepository):
    """
    Leitura via Scan paginado; a Specification é avaliada em memória

    Adequado para o volume do serviço (milhares de itens).
    """

    def __init__(
        self,
        unit_of_work: DynamoDBUnitOfWork,
        table_name: str = DYNAMODB_TABLE_NAME,
        client_manager: Optional[DynamoDBClientManager] = None
    ):
        super().__init__(unit_of_work)
        self.table_name = table_name
        self.client_manager = client_manager or get_dynamodb_client_manager()

    @tracer.wrap(resource="dynamodb.scan")
    async def _load(self, cancellation: Optional[CancellationToken]) -> List[WeatherForecast]:
        items: List[WeatherForecast] = []
        scan_kwargs: Dict[str, Any] = {'TableName': self.table_name}

        try:
            client = await self.client_manager.get_client()
            while True:
                if cancellation is not None:
                    cancellation.raise_if_cancelled()

                response = await client.scan(**scan_kwargs)
                items.extend(from_item(item) for item in response.get('Items', []))

                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                scan_kwargs['ExclusiveStartKey'] = last_key
        except (ClientError, BotoCoreError) as e:
            logger.warning("DynamoDB scan failed", table=self.table_name, error=str(e))
            translated = _translate("scan", e)
            if translated is e:
                raise
            raise translated from e

        return items

