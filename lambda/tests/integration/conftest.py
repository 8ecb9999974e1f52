"""
Fixtures compartilhadas para testes de integração
"""
import sys
import os
sys.path.insert(0, os.path.dirname(__file__))

from unittest.mock import AsyncMock, MagicMock

import pytest

from api_gateway_events import MockContext
from application.ports.output.brewery_provider_port import Brewery
from infrastructure.adapters.input.lambda_handler import run_async
from infrastructure.container import build_container, set_container


@pytest.fixture
def mock_context():
    """Fixture que retorna MockContext para todos os testes"""
    return MockContext()


@pytest.fixture
def brewery_provider():
    provider = MagicMock()
    provider.get_random_brewery = AsyncMock(return_value=Brewery(id='b-1', name='Dog Brewing'))
    return provider


@pytest.fixture
def container(brewery_provider):
    """Container em memória com 1000 previsões fake, sem backoff entre retries"""
    built = build_container(
        backend='memory',
        seed_data=True,
        seed_amount=1000,
        brewery_provider=brewery_provider,
        retry_count=1,
        retry_backoff_seconds=0
    )
    set_container(built)
    yield built
    run_async(built.publisher.drain(timeout=1))
    set_container(None)
