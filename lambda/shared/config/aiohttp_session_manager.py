"""
Aiohttp Session Manager - Singleton para gerenciar sessão HTTP global
Reutiliza sessão entre invocações Lambda (warm starts)
"""
import asyncio
from typing import Optional

import aiohttp

from shared.config.logger_config import get_logger
from shared.config.settings import HTTP_CONNECT_TIMEOUT_SECONDS, HTTP_TOTAL_TIMEOUT_SECONDS

logger = get_logger(child=True)


class AiohttpSessionManager:
    """
    Gerenciador singleton de sessão aiohttp

    A sessão fica presa ao event loop em que foi criada; se o loop mudar
    (testes, asyncio.run) ela é fechada e recriada no loop atual.

    Uso:
        manager = get_aiohttp_session_manager()
        session = await manager.get_session()
        async with session.get(url) as response:
            data = await response.json()
    """

    _instance: Optional['AiohttpSessionManager'] = None

    def __init__(
        self,
        total_timeout: int = HTTP_TOTAL_TIMEOUT_SECONDS,
        connect_timeout: int = HTTP_CONNECT_TIMEOUT_SECONDS,
        limit: int = 50,
        limit_per_host: int = 10
    ):
        self.timeout = aiohttp.ClientTimeout(total=total_timeout, connect=connect_timeout)
        self.limit = limit
        self.limit_per_host = limit_per_host

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop_id: Optional[int] = None

    @classmethod
    def get_instance(cls, **kwargs) -> 'AiohttpSessionManager':
        """Retorna instância singleton (kwargs só valem na primeira criação)"""
        if cls._instance is None:
            cls._instance = cls(**kwargs)
            logger.info(
                "AiohttpSessionManager singleton created",
                total_timeout=cls._instance.timeout.total,
                limit=cls._instance.limit
            )
        return cls._instance

    async def get_session(self) -> aiohttp.ClientSession:
        """Retorna a sessão do loop atual (cria ou reutiliza)"""
        current_loop_id = id(asyncio.get_running_loop())

        if (self._session is not None
                and not self._session.closed
                and self._session_loop_id == current_loop_id):
            return self._session

        if self._session is not None and not self._session.closed:
            logger.info(
                "Event loop changed - recreating session",
                old_loop_id=self._session_loop_id,
                new_loop_id=current_loop_id
            )
            await self._close_session()

        self._session = aiohttp.ClientSession(
            timeout=self.timeout,
            connector=aiohttp.TCPConnector(limit=self.limit, limit_per_host=self.limit_per_host)
        )
        self._session_loop_id = current_loop_id
        logger.debug("Aiohttp session created", loop_id=current_loop_id)

        return self._session

    async def _close_session(self) -> None:
        if self._session is None:
            return
        try:
            if not self._session.closed:
                await self._session.close()
        except Exception as e:
            logger.warning("Error closing aiohttp session", error=str(e))
        finally:
            self._session = None
            self._session_loop_id = None

    async def cleanup(self) -> None:
        await self._close_session()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton instance (útil para testes)"""
        cls._instance = None


def get_aiohttp_session_manager(**kwargs) -> AiohttpSessionManager:
    """Factory function para obter instância singleton do gerenciador"""
    return AiohttpSessionManager.get_instance(**kwargs)
