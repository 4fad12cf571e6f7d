"""Index management."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import ArangoConfigurationError
from ._base import ResourceAPI, require, resource_exists

TYPE_PERSISTENT = "persistent"
TYPE_GEO = "geo"
TYPE_TTL = "ttl"
TYPE_MDI = "mdi"
TYPE_INVERTED = "inverted"
TYPE_VECTOR = "vector"

VECTOR_METRICS = ("cosine", "l2", "innerProduct")


class IndexAPI(ResourceAPI):
    """Create, inspect and drop collection indexes."""

    def list(self, collection: str, with_stats: bool = False, with_hidden: bool = False) -> list[dict[str, Any]]:
        require(collection, "Index: collection is required")
        query: dict[str, Any] = {"collection": collection}
        if with_stats:
            query["withStats"] = True
        if with_hidden:
            query["withHidden"] = True
        return self._http.get("/_api/index", query=query).get("indexes", [])

    def get(self, index_id: str) -> Any:
        """Fetch an index by its full id (``collection/id``)."""
        require(index_id, "Index: index_id is required")
        return self._http.get(f"/_api/index/{index_id}")

    def exists(self, index_id: str) -> bool:
        return resource_exists(lambda: self.get(index_id))

    def create(self, collection: str, definition: Mapping[str, Any]) -> Any:
        """Create an index from a wire-form definition containing at least ``type``."""
        require(collection, "Index: collection is required")
        if not definition or not definition.get("type"):
            raise ArangoConfigurationError("Index: definition with type is required")
        return self._http.post("/_api/index", dict(definition), query={"collection": collection})

    def create_persistent(
        self,
        collection: str,
        fields: Sequence[str],
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        return self._create_typed(collection, TYPE_PERSISTENT, fields, options)

    def create_geo(
        self,
        collection: str,
        fields: Sequence[str],
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        return self._create_typed(collection, TYPE_GEO, fields, options)

    def create_ttl(
        self,
        collection: str,
        field: str,
        expire_after: int,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        """Expire documents ``expire_after`` seconds after the timestamp in ``field``."""
        return self._create_typed(
            collection, TYPE_TTL, [field], {**(options or {}), "expireAfter": expire_after}
        )

    def create_mdi(
        self,
        collection: str,
        fields: Sequence[str],
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        merged = {"fieldValueTypes": "double", **(options or {})}
        return self._create_typed(collection, TYPE_MDI, fields, merged)

    def create_inverted(
        self,
        collection: str,
        fields: Sequence[Any],
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        return self._create_typed(collection, TYPE_INVERTED, fields, options)

    def create_vector(
        self,
        collection: str,
        field: str,
        *,
        dimension: int,
        n_lists: int,
        metric: str = "cosine",
        default_n_probe: int | None = None,
        training_iterations: int | None = None,
        factory: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        """Create a vector index over the embedding array stored in ``field``.

        Args:
            collection: Collection name containing embedding documents.
            field: Attribute holding the embedding array.
            dimension: Embedding vector dimension.
            n_lists: Number of IVF cells (about N/15 for N documents).
            metric: Distance metric: "cosine", "l2" or "innerProduct".
            default_n_probe: Number of cells to probe during search.
            training_iterations: Training iterations for the quantizer.
            factory: Faiss factory string for advanced configurations.
            options: Other index attributes (``name``, ``sparse``, ``parallelism``).

        Returns:
            Index definition dict from ArangoDB.
        """
        require(field, "Index: field is required")
        if metric not in VECTOR_METRICS:
            raise ArangoConfigurationError(
                f"Index: metric must be one of {', '.join(VECTOR_METRICS)}, got {metric!r}"
            )

        params: dict[str, Any] = {"metric": metric, "dimension": dimension, "nLists": n_lists}
        if default_n_probe is not None:
            params["defaultNProbe"] = default_n_probe
        if training_iterations is not None:
            params["trainingIterations"] = training_iterations
        if factory:
            params["factory"] = factory

        return self._create_typed(collection, TYPE_VECTOR, [field], {**(options or {}), "params": params})

    def drop(self, index_id: str) -> Any:
        require(index_id, "Index: index_id is required")
        return self._http.delete(f"/_api/index/{index_id}")

    def get_by_name(self, collection: str, name: str) -> dict[str, Any] | None:
        for index in self.list(collection):
            if index.get("name") == name:
                return index
        return None

    def ensure(self, collection: str, definition: Mapping[str, Any]) -> tuple[Any, bool]:
        """Create an index unless one with the same name exists.

        Returns:
            (index info, True if it was created)
        """
        name = definition.get("name") if definition else None
        if name:
            existing = self.get_by_name(collection, name)
            if existing is not None:
                return existing, False
        return self.create(collection, definition), True

    def _create_typed(
        self,
        collection: str,
        index_type: str,
        fields: Sequence[Any],
        options: Mapping[str, Any] | None,
    ) -> Any:
        if not fields:
            raise ArangoConfigurationError("Index: fields are required")
        definition = {**(options or {}), "type": index_type, "fields": list(fields)}
        return self.create(collection, definition)
