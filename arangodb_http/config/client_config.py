"""Connection settings for :class:`~arangodb_http.client.ArangoClient`."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from .config_base import BaseConfig

DEFAULT_DATABASE = "_system"
DEFAULT_TIMEOUT = 30.0
DEFAULT_KEEPALIVE = 60.0
DEFAULT_POOL_SIZE = 100

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class ArangoClientConfig(BaseConfig):
    """
    Endpoint, credentials and connection hints for one client instance.

    Exactly one authentication scheme is active: a bearer ``token`` when one
    is set, otherwise Basic auth with ``username``/``password``. Timeouts and
    keepalive are in seconds.
    """

    endpoint: str = Field(description="Base URL of the server, e.g. http://127.0.0.1:8529")
    username: str | None = Field(default=None, description="Username for Basic authentication")
    password: str = Field(default="", repr=False, description="Password for Basic authentication")
    token: str | None = Field(default=None, repr=False, description="JWT for bearer authentication")
    database: str = Field(default=DEFAULT_DATABASE, min_length=1, description="Default database name")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    keepalive: float = Field(default=DEFAULT_KEEPALIVE, ge=0, description="Idle keepalive in seconds")
    pool_size: int = Field(default=DEFAULT_POOL_SIZE, ge=1, description="Connection pool size")
    ssl_verify: bool = Field(default=False, description="Verify TLS certificates")
    http2: bool = Field(default=True, description="Negotiate HTTP/2 when the server offers it")

    @field_validator("endpoint")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def auth_scheme(self) -> str | None:
        """Name of the active authentication scheme (``bearer``, ``basic`` or None)."""
        if self.token:
            return "bearer"
        if self.username:
            return "basic"
        return None

    def validate_semantics(self) -> list[str]:
        errors = []
        if not self.endpoint:
            errors.append("endpoint is required")
        elif not self.endpoint.startswith(("http://", "https://")):
            errors.append(f"endpoint must be an http(s) URL, got {self.endpoint!r}")
        if self.auth_scheme is None:
            errors.append("authentication required (provide username/password or token)")
        return errors

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> ArangoClientConfig:
        """
        Resolve configuration from ``ARANGO_*`` environment variables.

        Explicit keyword overrides take precedence over the environment.
        Unparseable numeric values fall back to the defaults.
        """
        env = os.environ if environ is None else environ

        data: dict[str, Any] = {
            "endpoint": env.get("ARANGO_URL", "http://localhost:8529"),
            "database": env.get("ARANGO_DATABASE", DEFAULT_DATABASE),
            "timeout": _parse_float(env.get("ARANGO_TIMEOUT"), DEFAULT_TIMEOUT),
            "keepalive": _parse_float(env.get("ARANGO_KEEPALIVE"), DEFAULT_KEEPALIVE),
            "pool_size": _parse_int(env.get("ARANGO_POOL_SIZE"), DEFAULT_POOL_SIZE),
            "ssl_verify": env.get("ARANGO_SSL_VERIFY", "false").strip().lower() in _TRUE_VALUES,
        }
        if env.get("ARANGO_TOKEN"):
            data["token"] = env["ARANGO_TOKEN"]
        if env.get("ARANGO_USERNAME"):
            data["username"] = env["ARANGO_USERNAME"]
            data["password"] = env.get("ARANGO_PASSWORD", "")

        data.update({key: value for key, value in overrides.items() if value is not None})
        data["source"] = "environment"
        return cls.from_dict(data)
