"""High-level ArangoDB client.

Wires one shared :class:`~arangodb_http.transport.ArangoHttpClient` into the
resource wrappers::

    with ArangoClient(endpoint="http://127.0.0.1:8529", username="root", password="pw") as client:
        client.use_database("shop")
        client.collection.create_document("orders")
        client.document.create("orders", {"_key": "1", "total": 42})
        rows = client.query.all("FOR o IN orders RETURN o")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from .config.client_config import ArangoClientConfig
from .errors import ArangoError
from .query.cursor import QueryAPI
from .resources import (
    AdminAPI,
    AnalyzerAPI,
    CollectionAPI,
    DatabaseAPI,
    DocumentAPI,
    FoxxAPI,
    GraphAPI,
    IndexAPI,
    UserAPI,
    ViewAPI,
)
from .transaction.stream import TransactionAPI
from .transport.http_client import ArangoHttpClient, ArangoResponse


class ArangoClient:
    """Client for the ArangoDB HTTP API.

    Configuration errors (missing endpoint or credentials) are raised here,
    before any network activity.

    Attributes:
        db: Database management
        collection: Collection management
        document: Document CRUD and import/export
        index: Index management
        query: AQL queries and cursors
        transaction: JavaScript and stream transactions
        user: Users and permissions
        admin: Server administration
        graph: Named graphs, vertices, edges and traversals
        view: ArangoSearch and search-alias views
        analyzer: Text analyzers
        foxx: Foxx services
    """

    def __init__(
        self,
        config: ArangoClientConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        **options: Any,
    ) -> None:
        """
        Args:
            config: Prebuilt configuration; mutually exclusive with ``options``
            transport: Custom httpx transport (testing, Unix sockets)
            **options: ArangoClientConfig fields (endpoint, username, password,
                token, database, timeout, keepalive, pool_size, ssl_verify, http2)
        """
        if config is None:
            config = ArangoClientConfig.from_dict(options)
        elif options:
            raise TypeError("pass either a config or keyword options, not both")

        self._http = ArangoHttpClient(config, transport=transport)

        self.query = QueryAPI(self._http)
        self.db = DatabaseAPI(self._http, self.query)
        self.collection = CollectionAPI(self._http)
        self.document = DocumentAPI(self._http)
        self.index = IndexAPI(self._http)
        self.transaction = TransactionAPI(self._http, self.query, self.document)
        self.user = UserAPI(self._http)
        self.admin = AdminAPI(self._http)
        self.graph = GraphAPI(self._http)
        self.view = ViewAPI(self._http)
        self.analyzer = AnalyzerAPI(self._http)
        self.foxx = FoxxAPI(self._http)

    @classmethod
    def from_env(cls, **overrides: Any) -> ArangoClient:
        """Build a client from ``ARANGO_*`` environment variables."""
        return cls(ArangoClientConfig.from_env(**overrides))

    @classmethod
    def from_file(cls, path: str | Path) -> ArangoClient:
        """Build a client from a JSON or YAML configuration file."""
        return cls(ArangoClientConfig.from_file(path))

    @property
    def config(self) -> ArangoClientConfig:
        return self._http.config

    @property
    def http(self) -> ArangoHttpClient:
        """The shared transport, for endpoints without a dedicated wrapper."""
        return self._http

    # ------------------------------------------------------------------
    # Current database
    # ------------------------------------------------------------------
    @property
    def database(self) -> str:
        return self._http.database

    def use_database(self, name: str) -> None:
        """Switch the default database of this client instance."""
        self._http.use_database(name)

    # ------------------------------------------------------------------
    # Transport contract
    # ------------------------------------------------------------------
    def request(self, method: str, path: str, **options: Any) -> ArangoResponse:
        return self._http.request(method, path, **options)

    def get(self, path: str, **options: Any) -> Any:
        return self._http.get(path, **options)

    def post(self, path: str, body: Any = None, **options: Any) -> Any:
        return self._http.post(path, body, **options)

    def put(self, path: str, body: Any = None, **options: Any) -> Any:
        return self._http.put(path, body, **options)

    def patch(self, path: str, body: Any = None, **options: Any) -> Any:
        return self._http.patch(path, body, **options)

    def delete(self, path: str, **options: Any) -> Any:
        return self._http.delete(path, **options)

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    def version(self, details: bool = False) -> dict[str, Any]:
        return self.admin.version(details)

    def engine(self) -> dict[str, Any]:
        return self.admin.engine()

    def is_available(self) -> bool:
        """Health check: True if the server answers the version endpoint."""
        try:
            self.version()
        except ArangoError:
            return False
        return True

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ArangoClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ArangoClient({self.config.endpoint!r}, database={self.database!r})"
