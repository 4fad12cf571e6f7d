"""Collection management."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ._base import ResourceAPI, require, resource_exists

TYPE_DOCUMENT = 2
TYPE_EDGE = 3


class CollectionAPI(ResourceAPI):
    """Collections of the current (or overridden) database."""

    def list(self, exclude_system: bool = False) -> list[dict[str, Any]]:
        query = {"excludeSystem": True} if exclude_system else None
        data = self._http.get("/_api/collection", query=query)
        return data.get("result", [])

    def get(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.get(f"/_api/collection/{name}")

    def exists(self, name: str) -> bool:
        return resource_exists(lambda: self.get(name))

    def properties(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.get(f"/_api/collection/{name}/properties")

    def count(self, name: str) -> int:
        """Number of documents in the collection."""
        require(name, "Collection: name is required")
        return self._http.get(f"/_api/collection/{name}/count").get("count")

    def figures(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.get(f"/_api/collection/{name}/figures").get("figures")

    def revision(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.get(f"/_api/collection/{name}/revision").get("revision")

    def checksum(self, name: str, with_revisions: bool = False, with_data: bool = False) -> Any:
        require(name, "Collection: name is required")
        query = {"withRevisions": with_revisions, "withData": with_data}
        return self._http.get(f"/_api/collection/{name}/checksum", query=query)

    def create(self, name: str, options: Mapping[str, Any] | None = None) -> Any:
        """Create a collection.

        Args:
            name: Collection name
            options: Creation properties in wire form (``type``,
                ``waitForSync``, ``keyOptions``, ``schema``, ``numberOfShards``, ...)
        """
        require(name, "Collection: name is required")
        payload = dict(options or {})
        payload["name"] = name
        return self._http.post("/_api/collection", payload)

    def create_document(self, name: str, options: Mapping[str, Any] | None = None) -> Any:
        return self.create(name, {**(options or {}), "type": TYPE_DOCUMENT})

    def create_edge(self, name: str, options: Mapping[str, Any] | None = None) -> Any:
        return self.create(name, {**(options or {}), "type": TYPE_EDGE})

    def drop(self, name: str, is_system: bool = False) -> Any:
        require(name, "Collection: name is required")
        query = {"isSystem": True} if is_system else None
        return self._http.delete(f"/_api/collection/{name}", query=query)

    def truncate(self, name: str) -> Any:
        """Remove all documents, keeping the collection and its indexes."""
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/truncate", {})

    def rename(self, name: str, new_name: str) -> Any:
        require(name, "Collection: name is required")
        require(new_name, "Collection: new_name is required")
        return self._http.put(f"/_api/collection/{name}/rename", {"name": new_name})

    def set_properties(self, name: str, properties: Mapping[str, Any]) -> Any:
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/properties", dict(properties))

    def load(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/load", {})

    def unload(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/unload", {})

    def load_indexes(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/loadIndexesIntoMemory", {})

    def recalculate_count(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/recalculateCount", {})

    def compact(self, name: str) -> Any:
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/compact", {})

    def responsible_shard(self, name: str, document: Mapping[str, Any]) -> Any:
        """Cluster only: the shard a document with these shard keys lives on."""
        require(name, "Collection: name is required")
        return self._http.put(f"/_api/collection/{name}/responsibleShard", dict(document))

    def shards(self, name: str, details: bool = False) -> Any:
        require(name, "Collection: name is required")
        query = {"details": True} if details else None
        return self._http.get(f"/_api/collection/{name}/shards", query=query)
