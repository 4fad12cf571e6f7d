"""
Configuration
=============

Validated, immutable client configuration.

- BaseConfig: Pydantic foundation with dict/JSON/YAML loading
- ArangoClientConfig: endpoint, credentials and connection hints
"""

from .client_config import (
    DEFAULT_DATABASE,
    DEFAULT_KEEPALIVE,
    DEFAULT_POOL_SIZE,
    DEFAULT_TIMEOUT,
    ArangoClientConfig,
)
from .config_base import BaseConfig

__all__ = [
    'ArangoClientConfig',
    'BaseConfig',
    'DEFAULT_DATABASE',
    'DEFAULT_KEEPALIVE',
    'DEFAULT_POOL_SIZE',
    'DEFAULT_TIMEOUT',
]
