"""ArangoSearch and search-alias views."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import ArangoError, is_not_found
from ._base import ResourceAPI, require, resource_exists

TYPE_ARANGOSEARCH = "arangosearch"
TYPE_SEARCH_ALIAS = "search-alias"


def _view_path(name: str, suffix: str = "") -> str:
    require(name, "View: name is required")
    return f"/_api/view/{name}{suffix}"


class ViewAPI(ResourceAPI):
    """View management, including link and index membership helpers."""

    def list(self) -> list[dict[str, Any]]:
        return self._http.get("/_api/view").get("result", [])

    def get(self, name: str) -> dict[str, Any]:
        return self._http.get(_view_path(name))

    def properties(self, name: str) -> dict[str, Any]:
        return self._http.get(_view_path(name, "/properties"))

    def exists(self, name: str) -> bool:
        return resource_exists(lambda: self.get(name))

    def get_with_type(self, name: str) -> tuple[dict[str, Any] | None, str | None]:
        """Return ``(view, type)``, or ``(None, None)`` when the view is missing."""
        try:
            view = self.get(name)
        except ArangoError as exc:
            if is_not_found(exc):
                return None, None
            raise
        return view, view.get("type")

    def create(
        self,
        name: str,
        view_type: str = TYPE_ARANGOSEARCH,
        properties: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        require(name, "View: name is required")
        body = {**dict(properties or {}), "name": name, "type": view_type or TYPE_ARANGOSEARCH}
        return self._http.post("/_api/view", body)

    def create_arangosearch(self, name: str, properties: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.create(name, TYPE_ARANGOSEARCH, properties)

    def create_search_alias(self, name: str, indexes: Sequence[Mapping[str, Any]] | None = None) -> dict[str, Any]:
        """Create a search-alias view over ``{"collection", "index"}`` pairs."""
        return self.create(name, TYPE_SEARCH_ALIAS, {"indexes": [dict(i) for i in indexes or []]})

    def create_simple(
        self,
        name: str,
        collection: str,
        *,
        include_all_fields: bool = True,
        analyzers: Sequence[str] | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create an arangosearch view linked to a single collection."""
        require(collection, "View: collection is required")
        link: dict[str, Any] = {"includeAllFields": include_all_fields}
        if analyzers:
            link["analyzers"] = list(analyzers)
        if fields:
            link["fields"] = dict(fields)
        return self.create_arangosearch(name, {"links": {collection: link}})

    def drop(self, name: str) -> Any:
        return self._http.delete(_view_path(name))

    def rename(self, name: str, new_name: str) -> dict[str, Any]:
        require(new_name, "View: new_name is required")
        return self._http.put(_view_path(name, "/rename"), {"name": new_name})

    def update_properties(self, name: str, properties: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update view properties (PATCH)."""
        return self._http.patch(_view_path(name, "/properties"), dict(properties or {}))

    def replace_properties(self, name: str, properties: Mapping[str, Any]) -> dict[str, Any]:
        """Replace all view properties (PUT)."""
        return self._http.put(_view_path(name, "/properties"), dict(properties or {}))

    # ------------------------------------------------------------------
    # arangosearch links
    # ------------------------------------------------------------------
    def add_link(self, view: str, collection: str, link: Mapping[str, Any] | None = None) -> dict[str, Any]:
        require(collection, "View: collection is required")
        return self.update_properties(view, {"links": {collection: dict(link or {})}})

    update_link = add_link

    def remove_link(self, view: str, collection: str) -> dict[str, Any]:
        require(collection, "View: collection is required")
        # null removes the link
        return self.update_properties(view, {"links": {collection: None}})

    # ------------------------------------------------------------------
    # search-alias indexes
    # ------------------------------------------------------------------
    def add_index(self, view: str, collection: str, index: str) -> dict[str, Any]:
        require(collection, "View: collection is required")
        require(index, "View: index is required")
        return self.update_properties(view, {"indexes": [{"collection": collection, "index": index}]})

    def remove_index(self, view: str, collection: str, index: str) -> dict[str, Any]:
        """Drop one index from a search-alias view by replacing the index list."""
        require(collection, "View: collection is required")
        require(index, "View: index is required")
        current = self.properties(view).get("indexes", [])
        remaining = [
            entry
            for entry in current
            if not (entry.get("collection") == collection and entry.get("index") == index)
        ]
        return self.replace_properties(view, {"indexes": remaining})
