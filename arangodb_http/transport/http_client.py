"""Synchronous HTTP transport for the ArangoDB REST API.

Every higher-level operation funnels through :meth:`ArangoHttpClient.request`,
which resolves the database-scoped URL, attaches the authorization header,
serializes the body with orjson and normalizes failures into the exception
taxonomy of :mod:`arangodb_http.errors`.

No automatic retries are performed. Connection pooling and keepalive are
delegated to httpx; this module only passes the pool-size and keepalive
hints through.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import orjson

from ..config.client_config import ArangoClientConfig
from ..errors import (
    ArangoApplicationError,
    ArangoConfigurationError,
    ArangoConnectionError,
    ArangoHttpError,
)
from ..logging import get_logger
from .auth import build_auth_header
from .query_string import QueryParams, build_query_string, database_path

JSON_CONTENT_TYPE = "application/json"


@dataclass
class ArangoResponse:
    """Decoded response plus the raw pieces some callers need (e.g. ETag)."""

    status_code: int
    headers: httpx.Headers
    body: bytes
    data: Any = None
    url: str = ""
    method: str = ""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


def decode_body(body: bytes) -> Any:
    """Decode a JSON response body; non-JSON text is wrapped as ``{"body": text}``."""
    if not body:
        return None
    try:
        return orjson.loads(body)
    except orjson.JSONDecodeError:
        return {"body": body.decode("utf-8", errors="replace")}


class ArangoHttpClient:
    """Request/response core shared by every resource wrapper.

    The current database is mutable client state. It is not safe to switch
    it while other threads issue calls that rely on the default; pass
    ``database=`` per call instead.

    The configuration is validated again on construction, so a config built
    without ``from_dict`` still fails here, before any connection is made.
    """

    def __init__(
        self,
        config: ArangoClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        config.validate_full()
        self._config = config
        self._database = config.database
        self._authorization = build_auth_header(config)
        self._log = get_logger(__name__, endpoint=config.endpoint)

        if transport is None:
            transport = httpx.HTTPTransport(
                verify=config.ssl_verify,
                http2=config.http2,
                limits=httpx.Limits(
                    max_connections=config.pool_size,
                    max_keepalive_connections=config.pool_size,
                    keepalive_expiry=config.keepalive,
                ),
                retries=0,
            )

        self._client = httpx.Client(
            transport=transport,
            timeout=httpx.Timeout(config.timeout),
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def config(self) -> ArangoClientConfig:
        return self._config

    @property
    def database(self) -> str:
        """Database used when a call does not pass ``database=``."""
        return self._database

    def use_database(self, name: str) -> None:
        """Switch the default database for subsequent calls."""
        if not name:
            raise ArangoConfigurationError("database name is required")
        self._database = name

    def resolve_url(
        self,
        path: str,
        query: QueryParams | None = None,
        database: str | None = None,
    ) -> str:
        """Build the absolute URL for ``path`` including the query string."""
        scoped = database_path(path, database or self._database)
        return f"{self._config.endpoint}{scoped}{build_query_string(query)}"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ArangoHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        raw_body: bytes | str | None = None,
        content_type: str | None = None,
        query: QueryParams | None = None,
        headers: Mapping[str, str] | None = None,
        database: str | None = None,
    ) -> ArangoResponse:
        """Perform an HTTP request against the REST API.

        Args:
            method: HTTP method
            path: API path, e.g. ``/_api/collection``
            body: Structured value serialized as JSON
            raw_body: Pre-encoded payload sent as-is (excludes ``body``)
            content_type: Content type for ``raw_body``
            query: Query parameters; list values repeat the key
            headers: Extra headers, merged over the defaults
            database: Database override for this call

        Returns:
            ArangoResponse with the decoded JSON in ``data``

        Raises:
            ArangoConfigurationError: If both ``body`` and ``raw_body`` are given
            ArangoConnectionError: If no response was received
            ArangoApplicationError: If the body carries an error envelope
            ArangoHttpError: If the status is >= 400 without an envelope
        """
        if body is not None and raw_body is not None:
            raise ArangoConfigurationError("body and raw_body are mutually exclusive")

        url = self.resolve_url(path, query, database)
        request_headers = httpx.Headers({
            "Content-Type": JSON_CONTENT_TYPE,
            "Accept": JSON_CONTENT_TYPE,
            "Authorization": self._authorization,
        })

        content: bytes | None = None
        if raw_body is not None:
            content = raw_body.encode("utf-8") if isinstance(raw_body, str) else raw_body
            if content_type:
                request_headers["Content-Type"] = content_type
        elif body is not None:
            content = orjson.dumps(body)

        if headers:
            request_headers.update(headers)

        self._log.debug("arango_request", method=method, url=url)
        try:
            response = self._client.request(method, url, content=content, headers=request_headers)
        except httpx.TransportError as exc:
            self._log.warning("arango_connection_failed", method=method, url=url, error=str(exc))
            raise ArangoConnectionError(
                f"ArangoDB request failed: {method} {url}: {exc}",
                method=method,
                url=url,
            ) from exc

        return self._handle_response(method, url, response)

    def get(self, path: str, **options: Any) -> Any:
        return self.request("GET", path, **options).data

    def post(self, path: str, body: Any = None, **options: Any) -> Any:
        return self.request("POST", path, body=body, **options).data

    def put(self, path: str, body: Any = None, **options: Any) -> Any:
        return self.request("PUT", path, body=body, **options).data

    def patch(self, path: str, body: Any = None, **options: Any) -> Any:
        return self.request("PATCH", path, body=body, **options).data

    def delete(self, path: str, **options: Any) -> Any:
        return self.request("DELETE", path, **options).data

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _handle_response(self, method: str, url: str, response: httpx.Response) -> ArangoResponse:
        raw = response.content or b""
        data = decode_body(raw)

        if isinstance(data, dict) and data.get("error"):
            error = ArangoApplicationError(
                data.get("errorNum") or 0,
                data.get("errorMessage") or "Unknown error",
                status_code=response.status_code,
                details=data,
            )
            self._log.warning(
                "arango_application_error",
                method=method,
                url=url,
                status=response.status_code,
                error_num=error.error_num,
            )
            raise error

        if response.status_code >= 400:
            details = data if isinstance(data, dict) else {}
            message = details.get("errorMessage") or response.text or "Request failed"
            self._log.warning("arango_http_error", method=method, url=url, status=response.status_code)
            raise ArangoHttpError(response.status_code, message, details)

        return ArangoResponse(
            status_code=response.status_code,
            headers=response.headers,
            body=raw,
            data=data,
            url=url,
            method=method,
        )


__all__ = [
    "ArangoHttpClient",
    "ArangoResponse",
    "JSON_CONTENT_TYPE",
    "decode_body",
]
