"""
DynamoDB Client Manager - Singleton para gerenciar cliente aioboto3
Reutiliza cliente entre invocações Lambda (warm starts)
"""
import asyncio
from typing import Optional

import aioboto3
from botocore.config import Config

from shared.config.logger_config import get_logger
from shared.config.settings import AWS_REGION, DYNAMODB_ENDPOINT_URL

logger = get_logger(child=True)


class DynamoDBClientManager:
    """
    Gerenciador singleton de cliente DynamoDB com aioboto3

    O cliente é um async context manager do aioboto3; ele é aberto uma vez
    por event loop e reaproveitado enquanto o loop não mudar.

    Uso:
        manager = get_dynamodb_client_manager()
        client = await manager.get_client()
        response = await client.scan(TableName=...)
    """

    _instance: Optional['DynamoDBClientManager'] = None

    def __init__(
        self,
        region_name: str = AWS_REGION,
        endpoint_url: Optional[str] = DYNAMODB_ENDPOINT_URL,
        max_pool_connections: int = 50,
        connect_timeout: int = 3,
        read_timeout: int = 3
    ):
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.session = aioboto3.Session()

        # Retries do botocore ficam baixos: o pipeline faz o retry externo
        self.boto_config = Config(
            region_name=region_name,
            max_pool_connections=max_pool_connections,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={'max_attempts': 1, 'mode': 'standard'}
        )

        self._client = None
        self._client_loop_id: Optional[int] = None
        self._client_context_manager = None

    @classmethod
    def get_instance(cls, **kwargs) -> 'DynamoDBClientManager':
        """Retorna instância singleton (kwargs só valem na primeira criação)"""
        if cls._instance is None:
            cls._instance = cls(**kwargs)
        return cls._instance

    async def get_client(self):
        """Retorna cliente DynamoDB do loop atual (cria ou reutiliza)"""
        current_loop_id = id(asyncio.get_running_loop())

        if self._client is not None and self._client_loop_id == current_loop_id:
            return self._client

        if self._client is not None:
            await self._close_client()

        try:
            self._client_context_manager = self.session.client(
                'dynamodb',
                region_name=self.region_name,
                endpoint_url=self.endpoint_url,
                config=self.boto_config
            )
            self._client = await self._client_context_manager.__aenter__()
            self._client_loop_id = current_loop_id
        except Exception as e:
            self._client = None
            self._client_loop_id = None
            self._client_context_manager = None
            raise RuntimeError(f"Failed to create DynamoDB client: {str(e)}") from e

        logger.debug("DynamoDB client created", region=self.region_name, loop_id=current_loop_id)
        return self._client

    async def _close_client(self) -> None:
        if self._client is None:
            return
        try:
            if self._client_context_manager is not None:
                await self._client_context_manager.__aexit__(None, None, None)
        except Exception as e:
            logger.warning("Error closing DynamoDB client", error=str(e))
        finally:
            self._client = None
            self._client_loop_id = None
            self._client_context_manager = None

    async def cleanup(self) -> None:
        await self._close_client()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton instance (útil para testes)"""
        cls._instance = None


def get_dynamodb_client_manager(**kwargs) -> DynamoDBClientManager:
    """Factory function para obter instância singleton do gerenciador"""
    return DynamoDBClientManager.get_instance(**kwargs)
