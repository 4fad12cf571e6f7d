"""
arangodb-http - synchronous client for the ArangoDB HTTP API.

Provides:
- Database-scoped request routing with Basic or bearer authentication
- AQL execution with lazy, batch-by-batch cursor iteration
- Stream transactions with guaranteed commit/abort
- Wrappers for databases, collections, documents, indexes, users, admin,
  graphs, views, analyzers and Foxx services

Example usage:
    from arangodb_http import ArangoClient

    client = ArangoClient(endpoint="http://127.0.0.1:8529", username="root", password="pw")
    for row in client.query.iterate("FOR d IN docs RETURN d", options={"batchSize": 500}):
        print(row)

    def move(trx_id):
        client.transaction.create_document(trx_id, "audit", {"event": "moved"})
        return "ok"

    client.transaction.run({"write": ["audit"]}, move)
"""

from __future__ import annotations

__version__ = "0.1.0"

from .client import ArangoClient
from .config import ArangoClientConfig
from .errors import (
    ArangoApplicationError,
    ArangoConfigurationError,
    ArangoConnectionError,
    ArangoError,
    ArangoHttpError,
    ConfigValidationError,
    is_not_found,
)
from .query import Cursor, QueryOptions
from .resources import DocumentOptions, ImportOptions
from .transaction import TransactionHandle, TransactionOptions, TransactionStatus
from .transport import ArangoHttpClient, ArangoResponse

__all__ = [
    # Main classes
    "ArangoClient",
    "ArangoClientConfig",
    "ArangoHttpClient",
    "ArangoResponse",
    # Query and transaction types
    "Cursor",
    "QueryOptions",
    "DocumentOptions",
    "ImportOptions",
    "TransactionHandle",
    "TransactionOptions",
    "TransactionStatus",
    # Exceptions
    "ArangoError",
    "ArangoConfigurationError",
    "ConfigValidationError",
    "ArangoConnectionError",
    "ArangoApplicationError",
    "ArangoHttpError",
    "is_not_found",
    # Version
    "__version__",
]
