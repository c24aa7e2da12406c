from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest
import pytest_asyncio

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """List collecting the requests seen by ``mock_transport``."""
    return []


@pytest.fixture
def mock_transport(recorded_requests: list[httpx.Request]) -> httpx.MockTransport:
    """Create a transport echoing the request as JSON.

    Every request is appended to ``recorded_requests``.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "url": str(request.url),
                "body": request.content.decode() or None,
            },
        )

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture
async def http_client(mock_transport: httpx.MockTransport) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create an httpx.AsyncClient backed by ``mock_transport``."""
    async with httpx.AsyncClient(transport=mock_transport) as client:
        yield client
