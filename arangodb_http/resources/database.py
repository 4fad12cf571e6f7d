"""Database management (server-global endpoints)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..query.cursor import Cursor, QueryAPI, QueryOptions
from ..transport.http_client import ArangoHttpClient
from ._base import ResourceAPI, require


class DatabaseAPI(ResourceAPI):
    """List, create and drop databases."""

    def __init__(self, http: ArangoHttpClient, query: QueryAPI) -> None:
        super().__init__(http)
        self._query = query

    def list(self) -> list[str]:
        """All databases on the server (requires access to ``_system``)."""
        return self._http.get("/_api/database").get("result", [])

    def list_user(self) -> list[str]:
        """Databases the current user can access."""
        return self._http.get("/_api/database/user").get("result", [])

    def current(self, database: str | None = None) -> dict[str, Any]:
        """Information about the current (or the given) database."""
        name = database or self._http.database
        return self._http.get(f"/_db/{name}/_api/database/current").get("result", {})

    def exists(self, name: str) -> bool:
        return name in self.list()

    def create(
        self,
        name: str,
        options: Mapping[str, Any] | None = None,
        users: Sequence[Mapping[str, Any]] | None = None,
    ) -> Any:
        """Create a database, optionally with initial users.

        Args:
            name: Database name
            options: Cluster options (``sharding``, ``replicationFactor``, ``writeConcern``)
            users: Users as ``{"username", "passwd", "active", "extra"}`` mappings
        """
        require(name, "Database: name is required")
        payload: dict[str, Any] = {"name": name}
        if options:
            payload["options"] = dict(options)
        if users:
            payload["users"] = [dict(user) for user in users]
        return self._http.post("/_api/database", payload)

    def drop(self, name: str) -> Any:
        require(name, "Database: name is required")
        return self._http.delete(f"/_api/database/{name}")

    def query(
        self,
        aql: str,
        bind_vars: Mapping[str, Any] | None = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> Cursor:
        """Shorthand for :meth:`QueryAPI.execute`."""
        return self._query.execute(aql, bind_vars, options)
