"""OpenBreweryDB Provider - cervejaria aleatória para o evento de criação"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from ddtrace import tracer
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    before_sleep_log
)

from application.ports.output.brewery_provider_port import Brewery, IBreweryProvider
from domain.exceptions import BreweryProviderException
from shared.config.aiohttp_session_manager import AiohttpSessionManager, get_aiohttp_session_manager
from shared.config.logger_config import get_logger
from shared.config.settings import BREWERY_API_BASE_URL
from shared.pipeline.cancellation import CancellationToken

logger = get_logger(child=True)

RETRYABLE_STATUS = (429, 503)


def is_retryable(error: BaseException) -> bool:
    """Só timeout, rate limit (429) e indisponibilidade (503) são retentados"""
    if isinstance(error, asyncio.TimeoutError):
        return True
    return isinstance(error, aiohttp.ClientResponseError) and error.status in RETRYABLE_STATUS


class OpenBreweryDbProvider(IBreweryProvider):
    """
    Provider para Open Brewery DB (https://www.openbrewerydb.org)

    GET {base_url}/breweries/random retorna uma lista com uma cervejaria.
    Rate limit (429), indisponibilidade (503) e timeouts são retentados até 3 vezes;
    demais status de erro falham na primeira tentativa.
    """

    def __init__(
        self,
        base_url: str = BREWERY_API_BASE_URL,
        session_manager: Optional[AiohttpSessionManager] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.session_manager = session_manager or get_aiohttp_session_manager()

    @tracer.wrap(resource="openbrewerydb.get_random_brewery")
    async def get_random_brewery(self, cancellation: Optional[CancellationToken] = None) -> Brewery:
        url = f"{self.base_url}/breweries/random"
        session = await self.session_manager.get_session()

        @retry(
            retry=retry_if_exception(is_retryable),
            stop=stop_after_attempt(3),
            wait=wait_exponential(multiplier=1, min=1, max=4),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        async def fetch_with_retry() -> Any:
            async with session.get(url) as response:
                if response.status in RETRYABLE_STATUS:
                    raise aiohttp.ClientResponseError(
                        request_info=response.request_info,
                        history=response.history,
                        status=response.status
                    )
                response.raise_for_status()
                return await response.json()

        try:
            if cancellation is not None:
                payload = await cancellation.guard(fetch_with_retry())
            else:
                payload = await fetch_with_retry()
        except aiohttp.ClientResponseError as e:
            raise BreweryProviderException(
                f"HTTP {e.status} {e.message or ''}".strip(),
                details={"url": url, "status": e.status}
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise BreweryProviderException(
                str(e) or type(e).__name__,
                details={"url": url}
            ) from e

        return self._map_brewery(payload, url)

    @staticmethod
    def _map_brewery(payload: Any, url: str) -> Brewery:
        breweries = payload if isinstance(payload, list) else [payload]
        if not breweries or not isinstance(breweries[0], dict) or not breweries[0].get('name'):
            raise BreweryProviderException(
                "No exists available brewery for this weather!",
                details={"url": url, "code": "BAD_WEATHER"}
            )

        logger.info(f"`{len(breweries)}` breweries found!")
        first = breweries[0]
        return Brewery(id=str(first.get('id', '')), name=first['name'])
