"""
Transport
=========

HTTP request/response core: database-scoped routing, query-string
encoding, authentication headers and response normalization.
"""

from .auth import basic_auth_header, bearer_auth_header, build_auth_header
from .http_client import ArangoHttpClient, ArangoResponse, decode_body
from .query_string import (
    GLOBAL_PATH_PREFIXES,
    build_query_string,
    database_path,
    encode_query,
    is_global_path,
)

__all__ = [
    "ArangoHttpClient",
    "ArangoResponse",
    "GLOBAL_PATH_PREFIXES",
    "basic_auth_header",
    "bearer_auth_header",
    "build_auth_header",
    "build_query_string",
    "database_path",
    "decode_body",
    "encode_query",
    "is_global_path",
]
