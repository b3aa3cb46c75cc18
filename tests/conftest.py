from pathlib import Path
from typing import Any, Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from azure_code_interpreter.client import SessionPoolClient
from azure_code_interpreter.config import InterpreterConfig
from azure_code_interpreter.credentials import TokenProvider


@pytest.fixture
def download_dir(tmp_path: Path) -> Path:
    return tmp_path / "downloads"


@pytest.fixture
def config(download_dir: Path) -> InterpreterConfig:
    return InterpreterConfig(
        subscription_id="sub-123",
        resource_group="rg-test",
        session_pool="pool-test",
        region="westus2",
        download_directory=str(download_dir),
    )


@pytest.fixture
def mock_token_provider() -> Any:
    provider = MagicMock(spec=TokenProvider)
    provider.get_token = AsyncMock(return_value="test-token")
    provider.get_token_sync.return_value = "test-token"
    return provider


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(
    config: InterpreterConfig, mock_token_provider: Any, recorded_requests: list[httpx.Request]
) -> Generator[Callable[[Callable[[httpx.Request], httpx.Response]], SessionPoolClient], None, None]:
    """Build a SessionPoolClient whose HTTP traffic is served by the given handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> SessionPoolClient:
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return SessionPoolClient(config, mock_token_provider, http_client=http_client)

    yield _make
