"""AQL execution and cursor pagination.

A query opens a server-side cursor holding the first batch of results.
While ``hasMore`` is true the remaining batches are pulled one at a time
with :meth:`QueryAPI.next`. Once ``hasMore`` is false the server has already
discarded the cursor, so no further fetch is issued.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from ..errors import ArangoConfigurationError
from ..transport.http_client import ArangoHttpClient

# Wire names of options sent at the top level of the cursor request body
TOP_LEVEL_OPTIONS = ("count", "batchSize", "ttl", "cache", "memoryLimit")

# Wire names of options sent inside the nested ``options`` object
NESTED_OPTIONS = (
    "fullCount",
    "fillBlockCache",
    "stream",
    "allowDirtyReads",
    "maxRuntime",
    "maxWarningCount",
    "maxNodesPerCallstack",
    "satelliteSyncWait",
    "allowRetry",
    "profile",
    "optimizer",
    "shardIds",
    "transaction",
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(slots=True)
class QueryOptions:
    """Cursor creation options. Only fields that are set are sent."""

    count: bool | None = None
    batch_size: int | None = None
    ttl: int | None = None
    cache: bool | None = None
    memory_limit: int | None = None
    full_count: bool | None = None
    fill_block_cache: bool | None = None
    stream: bool | None = None
    allow_dirty_reads: bool | None = None
    max_runtime: float | None = None
    max_warning_count: int | None = None
    max_nodes_per_callstack: int | None = None
    satellite_sync_wait: float | None = None
    allow_retry: bool | None = None
    profile: int | None = None
    optimizer: dict[str, Any] | None = None
    shard_ids: list[str] | None = None
    transaction: dict[str, Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        """Return the set options keyed by their camelCase wire names."""
        return {
            _camel(f.name): getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def build_cursor_body(
    aql: str,
    bind_vars: Mapping[str, Any] | None = None,
    options: QueryOptions | Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the request body for ``POST /_api/cursor``.

    ``options`` may be a :class:`QueryOptions` or a mapping of wire names;
    unknown mapping keys are ignored.
    """
    body: dict[str, Any] = {"query": aql}
    if bind_vars:
        body["bindVars"] = dict(bind_vars)

    if options is None:
        return body
    wire = options.to_wire() if isinstance(options, QueryOptions) else options

    for name in TOP_LEVEL_OPTIONS:
        if wire.get(name) is not None:
            body[name] = wire[name]

    nested = {name: wire[name] for name in NESTED_OPTIONS if wire.get(name) is not None}
    if nested:
        body["options"] = nested
    return body


@dataclass
class Cursor:
    """One batch of query results plus the state needed to fetch the next."""

    id: str | None
    batch: list[Any]
    has_more: bool = False
    count: int | None = None
    cached: bool = False
    extra: dict[str, Any] = field(default_factory=dict)
    warnings: list[Any] = field(default_factory=list)
    database: str | None = None
    headers: dict[str, str] | None = None

    @classmethod
    def from_response(
        cls,
        data: Mapping[str, Any],
        *,
        database: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Cursor:
        has_more = bool(data.get("hasMore"))
        extra = data.get("extra") or {}
        return cls(
            # the id is meaningless once the server has dropped the cursor
            id=data.get("id") if has_more else None,
            batch=list(data.get("result") or []),
            has_more=has_more,
            count=data.get("count"),
            cached=bool(data.get("cached")),
            extra=extra,
            warnings=list(extra.get("warnings") or data.get("warnings") or []),
            database=database,
            headers=dict(headers) if headers else None,
        )

    @property
    def exhausted(self) -> bool:
        """True when no further batch can be fetched."""
        return not (self.has_more and self.id)


class QueryAPI:
    """AQL queries, cursors, query tracking, query cache and AQL functions."""

    def __init__(self, http: ArangoHttpClient) -> None:
        self._http = http

    # ------------------------------------------------------------------
    # Cursor protocol
    # ------------------------------------------------------------------
    def execute(
        self,
        aql: str,
        bind_vars: Mapping[str, Any] | None = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        database: str | None = None,
    ) -> Cursor:
        """Run a query and return its first batch.

        Args:
            aql: AQL query string
            bind_vars: Bind parameters
            options: Cursor options
            headers: Extra headers, e.g. a stream transaction id
            database: Database override for this query and its follow-ups

        Returns:
            Cursor holding the first batch
        """
        if not aql:
            raise ArangoConfigurationError("Query: aql is required")

        data = self._http.post(
            "/_api/cursor",
            build_cursor_body(aql, bind_vars, options),
            headers=headers,
            database=database,
        )
        return Cursor.from_response(data or {}, database=database, headers=headers)

    def next(
        self,
        cursor_id: str,
        *,
        headers: Mapping[str, str] | None = None,
        database: str | None = None,
    ) -> Cursor:
        """Fetch the batch following the one last returned for ``cursor_id``."""
        if not cursor_id:
            raise ArangoConfigurationError("Query: cursor_id is required")

        data = self._http.post(
            f"/_api/cursor/{cursor_id}",
            {},
            headers=headers,
            database=database,
        )
        return Cursor.from_response(data or {}, database=database, headers=headers)

    def delete_cursor(self, cursor_id: str, *, database: str | None = None) -> Any:
        """Release a cursor before it has been fully consumed."""
        if not cursor_id:
            raise ArangoConfigurationError("Query: cursor_id is required")
        return self._http.delete(f"/_api/cursor/{cursor_id}", database=database)

    def iterate(
        self,
        aql: str,
        bind_vars: Mapping[str, Any] | None = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        database: str | None = None,
    ) -> Iterator[Any]:
        """Run a query and lazily yield every result row.

        The query is sent immediately. Subsequent batches are fetched only
        when the rows already received have been consumed. The returned
        iterator is single-pass.
        """
        cursor = self.execute(aql, bind_vars, options, headers=headers, database=database)
        return self._drain(cursor)

    def all(
        self,
        aql: str,
        bind_vars: Mapping[str, Any] | None = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        database: str | None = None,
    ) -> list[Any]:
        """Run a query and return every row of every batch, in order."""
        return list(self.iterate(aql, bind_vars, options, headers=headers, database=database))

    def _drain(self, cursor: Cursor) -> Iterator[Any]:
        while True:
            yield from cursor.batch
            if cursor.exhausted:
                return
            cursor = self.next(cursor.id, headers=cursor.headers, database=cursor.database)

    # ------------------------------------------------------------------
    # Query inspection
    # ------------------------------------------------------------------
    def parse(self, aql: str, bind_vars: Mapping[str, Any] | None = None) -> Any:
        """Validate a query without executing it; returns the AST."""
        if not aql:
            raise ArangoConfigurationError("Query: aql is required")
        body: dict[str, Any] = {"query": aql}
        if bind_vars:
            body["bindVars"] = dict(bind_vars)
        return self._http.post("/_api/query", body)

    def explain(
        self,
        aql: str,
        bind_vars: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        """Return the execution plan(s) for a query."""
        if not aql:
            raise ArangoConfigurationError("Query: aql is required")
        body: dict[str, Any] = {"query": aql}
        if bind_vars:
            body["bindVars"] = dict(bind_vars)
        if options:
            body["options"] = dict(options)
        return self._http.post("/_api/explain", body)

    def kill(self, query_id: str) -> Any:
        if not query_id:
            raise ArangoConfigurationError("Query: query_id is required")
        return self._http.delete(f"/_api/query/{query_id}")

    def list_running(self, all_databases: bool = False) -> Any:
        return self._http.get("/_api/query/current", query=self._all_query(all_databases))

    def list_slow(self, all_databases: bool = False) -> Any:
        return self._http.get("/_api/query/slow", query=self._all_query(all_databases))

    def clear_slow(self, all_databases: bool = False) -> Any:
        return self._http.delete("/_api/query/slow", query=self._all_query(all_databases))

    def get_tracking(self) -> Any:
        return self._http.get("/_api/query/properties")

    def set_tracking(self, properties: Mapping[str, Any]) -> Any:
        return self._http.put("/_api/query/properties", dict(properties))

    def rules(self) -> Any:
        """List the optimizer rules known to the server."""
        return self._http.get("/_api/query/rules")

    # ------------------------------------------------------------------
    # Query results cache
    # ------------------------------------------------------------------
    def get_cache_properties(self) -> Any:
        return self._http.get("/_api/query-cache/properties")

    def set_cache_properties(self, properties: Mapping[str, Any]) -> Any:
        return self._http.put("/_api/query-cache/properties", dict(properties))

    def get_cache_entries(self) -> Any:
        return self._http.get("/_api/query-cache/entries")

    def clear_cache(self) -> Any:
        return self._http.delete("/_api/query-cache")

    # ------------------------------------------------------------------
    # User-defined AQL functions
    # ------------------------------------------------------------------
    def functions(self, namespace: str | None = None) -> Any:
        query = {"namespace": namespace} if namespace else None
        return self._http.get("/_api/aqlfunction", query=query)

    def create_function(self, name: str, code: str, is_deterministic: bool = False) -> Any:
        """Register a JavaScript AQL function under ``namespace::name``."""
        if not name:
            raise ArangoConfigurationError("Query: name is required")
        if not code:
            raise ArangoConfigurationError("Query: code is required")
        return self._http.post(
            "/_api/aqlfunction",
            {"name": name, "code": code, "isDeterministic": is_deterministic},
        )

    def delete_function(self, name: str, group: bool = False) -> Any:
        """Remove a function, or a whole namespace when ``group`` is set."""
        if not name:
            raise ArangoConfigurationError("Query: name is required")
        query = {"group": True} if group else None
        return self._http.delete(f"/_api/aqlfunction/{name}", query=query)

    @staticmethod
    def _all_query(all_databases: bool) -> dict[str, bool] | None:
        return {"all": True} if all_databases else None
