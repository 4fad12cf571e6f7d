"""Authorization header construction."""

from __future__ import annotations

import base64

from ..config.client_config import ArangoClientConfig
from ..errors import ArangoConfigurationError


def basic_auth_header(username: str, password: str) -> str:
    """Return the ``Authorization`` value for HTTP Basic authentication."""
    credentials = f"{username}:{password}".encode()
    return "Basic " + base64.b64encode(credentials).decode("ascii")


def bearer_auth_header(token: str) -> str:
    """Return the ``Authorization`` value for JWT bearer authentication."""
    return f"bearer {token}"


def build_auth_header(config: ArangoClientConfig) -> str:
    """
    Pick the single authentication scheme for a client.

    A bearer token wins over username/password when both are configured.

    Raises:
        ArangoConfigurationError: If neither scheme is configured
    """
    if config.auth_scheme == "bearer":
        return bearer_auth_header(config.token)
    if config.auth_scheme == "basic":
        return basic_auth_header(config.username, config.password)
    raise ArangoConfigurationError("authentication required (provide username/password or token)")
