"""
Unit Test Fixtures.

Fixtures for unit tests. The network is never touched: HTTP calls are
answered by a mocked httpx.AsyncClient.request.
"""

from collections.abc import Callable, Generator
from unittest.mock import AsyncMock, patch

import httpx
import pytest


@pytest.fixture
def mock_request() -> Generator[AsyncMock, None, None]:
    """
    Patch httpx.AsyncClient.request.

    Usage:
        def test_call(mock_request, json_response):
            mock_request.return_value = json_response(200, {"records": []})
    """
    with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mocked:
        yield mocked


@pytest.fixture
def json_response() -> Callable[[int, object], httpx.Response]:
    """Provide a builder for responses carrying a JSON body."""

    def build(status_code: int, payload: object) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return build


@pytest.fixture
def text_response() -> Callable[[int, str], httpx.Response]:
    """Provide a builder for responses carrying a raw text body."""

    def build(status_code: int, text: str) -> httpx.Response:
        return httpx.Response(status_code, text=text)

    return build
