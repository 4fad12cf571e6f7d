"""Shared fixtures: a patched httpx.Client and canned httpx responses."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest

from arangodb_http.config.client_config import ArangoClientConfig
from arangodb_http.transport.http_client import ArangoHttpClient

ENDPOINT = "http://arango:8529"


@pytest.fixture
def mock_httpx() -> MagicMock:
    """Patch httpx.Client/HTTPTransport and yield the mocked client instance."""
    with patch("arangodb_http.transport.http_client.httpx.Client") as mock_client_class:
        with patch("arangodb_http.transport.http_client.httpx.HTTPTransport"):
            mock_httpx_client = MagicMock()
            mock_client_class.return_value = mock_httpx_client
            yield mock_httpx_client


@pytest.fixture
def config() -> ArangoClientConfig:
    return ArangoClientConfig(
        endpoint=ENDPOINT,
        username="root",
        password="secret",
        database="test_db",
    )


@pytest.fixture
def http(config: ArangoClientConfig, mock_httpx: MagicMock) -> ArangoHttpClient:
    return ArangoHttpClient(config)


@pytest.fixture
def respond() -> Callable[..., httpx.Response]:
    """Factory for httpx responses: JSON payload, plain text or empty body."""

    def _respond(
        payload: Any = None,
        status_code: int = 200,
        *,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        if text is not None:
            return httpx.Response(status_code, text=text, headers=headers)
        if payload is None:
            return httpx.Response(status_code, headers=headers)
        return httpx.Response(status_code, json=payload, headers=headers)

    return _respond


@pytest.fixture
def sent(mock_httpx: MagicMock) -> Callable[[int], tuple[str, str, bytes | None, httpx.Headers]]:
    """Accessor for (method, url, content, headers) of a recorded request."""

    def _sent(index: int = -1) -> tuple[str, str, bytes | None, httpx.Headers]:
        call = mock_httpx.request.call_args_list[index]
        method, url = call.args
        return method, url, call.kwargs["content"], call.kwargs["headers"]

    return _sent
