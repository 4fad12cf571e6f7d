"""Named graphs (the ``gharial`` API) and traversals."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import ArangoConfigurationError
from ._base import ResourceAPI, pick, require, resource_exists, revision_headers

# Keys of ``options`` in the graph creation body
GRAPH_OPTIONS = (
    "isSmart",
    "isDisjoint",
    "smartGraphAttribute",
    "numberOfShards",
    "replicationFactor",
    "writeConcern",
    "satellites",
)

ELEMENT_WRITE_PARAMS = ("waitForSync", "returnNew", "returnOld", "keepNull")
ELEMENT_DELETE_PARAMS = ("waitForSync", "returnOld")
DEFINITION_PARAMS = ("waitForSync", "dropCollections")

TRAVERSAL_OPTIONS = (
    "direction",
    "graphName",
    "edgeCollection",
    "minDepth",
    "maxDepth",
    "uniqueness",
    "order",
    "itemOrder",
    "strategy",
    "filter",
    "visitor",
    "init",
    "expander",
    "sort",
    "maxIterations",
)


@dataclass(slots=True)
class GraphElementOptions:
    """Query options for vertex and edge writes. Only fields that are set are sent."""

    wait_for_sync: bool | None = None
    return_new: bool | None = None
    return_old: bool | None = None
    keep_null: bool | None = None


def _require_graph(graph: str) -> None:
    require(graph, "Graph: graph is required")


def _element_path(graph: str, kind: str, collection: str, key: str | None = None) -> str:
    _require_graph(graph)
    require(collection, "Graph: collection is required")
    path = f"/_api/gharial/{graph}/{kind}/{collection}"
    if key is not None:
        require(key, "Graph: key is required")
        path = f"{path}/{key}"
    return path


def _require_edge_ends(edge: Mapping[str, Any] | None) -> None:
    if not edge or not edge.get("_from") or not edge.get("_to"):
        raise ArangoConfigurationError("Graph: edge with _from and _to is required")


class GraphAPI(ResourceAPI):
    """Graph definitions, vertex and edge documents, and traversals.

    Vertex and edge reads unwrap the ``vertex``/``edge`` attribute of the
    response; deletes return the full response.
    """

    # ------------------------------------------------------------------
    # Graph management
    # ------------------------------------------------------------------
    def list(self) -> list[dict[str, Any]]:
        return self._http.get("/_api/gharial").get("graphs", [])

    def get(self, name: str) -> dict[str, Any]:
        _require_graph(name)
        return self._http.get(f"/_api/gharial/{name}").get("graph")

    def exists(self, name: str) -> bool:
        return resource_exists(lambda: self.get(name))

    def create(
        self,
        name: str,
        edge_definitions: Sequence[Mapping[str, Any]] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a named graph.

        Args:
            name: Graph name
            edge_definitions: ``{"collection", "from": [...], "to": [...]}`` mappings
            options: ``orphanCollections``, ``waitForSync`` and the cluster or
                enterprise settings listed in GRAPH_OPTIONS
        """
        _require_graph(name)
        options = options or {}

        body: dict[str, Any] = {
            "name": name,
            "edgeDefinitions": [dict(definition) for definition in edge_definitions or []],
        }
        if options.get("orphanCollections"):
            body["orphanCollections"] = list(options["orphanCollections"])
        graph_options = pick(options, GRAPH_OPTIONS)
        if graph_options:
            body["options"] = graph_options

        query = {"waitForSync": True} if options.get("waitForSync") else None
        return self._http.post("/_api/gharial", body, query=query).get("graph")

    def drop(self, name: str, drop_collections: bool = False) -> Any:
        _require_graph(name)
        query = {"dropCollections": True} if drop_collections else None
        return self._http.delete(f"/_api/gharial/{name}", query=query)

    # ------------------------------------------------------------------
    # Vertex collections and edge definitions
    # ------------------------------------------------------------------
    def list_vertex_collections(self, graph: str) -> list[str]:
        _require_graph(graph)
        return self._http.get(f"/_api/gharial/{graph}/vertex").get("collections", [])

    def add_vertex_collection(
        self,
        graph: str,
        collection: str,
        satellites: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        _require_graph(graph)
        require(collection, "Graph: collection is required")
        body: dict[str, Any] = {"collection": collection}
        if satellites:
            body["options"] = {"satellites": list(satellites)}
        return self._http.post(f"/_api/gharial/{graph}/vertex", body).get("graph")

    def remove_vertex_collection(self, graph: str, collection: str, drop_collection: bool = False) -> dict[str, Any]:
        query = {"dropCollection": True} if drop_collection else None
        return self._http.delete(_element_path(graph, "vertex", collection), query=query).get("graph")

    def list_edge_definitions(self, graph: str) -> list[dict[str, Any]]:
        return self.get(graph).get("edgeDefinitions", [])

    def add_edge_definition(
        self,
        graph: str,
        definition: Mapping[str, Any],
        satellites: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        _require_graph(graph)
        if not definition or not definition.get("collection"):
            raise ArangoConfigurationError("Graph: definition with collection is required")
        body = dict(definition)
        if satellites:
            body["options"] = {"satellites": list(satellites)}
        return self._http.post(f"/_api/gharial/{graph}/edge", body).get("graph")

    def replace_edge_definition(
        self,
        graph: str,
        edge_collection: str,
        definition: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Replace the ``from``/``to`` sets of an edge definition."""
        body = {**dict(definition or {}), "collection": edge_collection}
        return self._http.put(
            _element_path(graph, "edge", edge_collection),
            body,
            query=pick(options, DEFINITION_PARAMS) or None,
        ).get("graph")

    def remove_edge_definition(
        self,
        graph: str,
        edge_collection: str,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        return self._http.delete(
            _element_path(graph, "edge", edge_collection),
            query=pick(options, DEFINITION_PARAMS) or None,
        ).get("graph")

    # ------------------------------------------------------------------
    # Vertices
    # ------------------------------------------------------------------
    def get_vertex(self, graph: str, collection: str, key: str, *, rev: str | None = None) -> dict[str, Any]:
        path = _element_path(graph, "vertex", collection, key)
        return self._http.get(path, headers=revision_headers(rev)).get("vertex")

    def create_vertex(
        self,
        graph: str,
        collection: str,
        vertex: Mapping[str, Any],
        options: GraphElementOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        require(vertex, "Graph: vertex is required")
        return self._http.post(
            _element_path(graph, "vertex", collection),
            dict(vertex),
            query=pick(options, ELEMENT_WRITE_PARAMS) or None,
        ).get("vertex")

    def update_vertex(
        self,
        graph: str,
        collection: str,
        key: str,
        vertex: Mapping[str, Any],
        options: GraphElementOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
    ) -> dict[str, Any]:
        return self._http.patch(
            _element_path(graph, "vertex", collection, key),
            dict(vertex or {}),
            query=pick(options, ELEMENT_WRITE_PARAMS) or None,
            headers=revision_headers(if_match),
        ).get("vertex")

    def replace_vertex(
        self,
        graph: str,
        collection: str,
        key: str,
        vertex: Mapping[str, Any],
        options: GraphElementOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
    ) -> dict[str, Any]:
        return self._http.put(
            _element_path(graph, "vertex", collection, key),
            dict(vertex or {}),
            query=pick(options, ELEMENT_WRITE_PARAMS) or None,
            headers=revision_headers(if_match),
        ).get("vertex")

    def delete_vertex(
        self,
        graph: str,
        collection: str,
        key: str,
        options: GraphElementOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
    ) -> Any:
        """Delete a vertex and every edge of the graph that touches it."""
        return self._http.delete(
            _element_path(graph, "vertex", collection, key),
            query=pick(options, ELEMENT_DELETE_PARAMS) or None,
            headers=revision_headers(if_match),
        )

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------
    def get_edge(self, graph: str, collection: str, key: str, *, rev: str | None = None) -> dict[str, Any]:
        path = _element_path(graph, "edge", collection, key)
        return self._http.get(path, headers=revision_headers(rev)).get("edge")

    def create_edge(
        self,
        graph: str,
        collection: str,
        edge: Mapping[str, Any],
        options: GraphElementOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        path = _element_path(graph, "edge", collection)
        _require_edge_ends(edge)
        return self._http.post(path, dict(edge), query=pick(options, ELEMENT_WRITE_PARAMS) or None).get("edge")

    def update_edge(
        self,
        graph: str,
        collection: str,
        key: str,
        edge: Mapping[str, Any],
        options: GraphElementOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
    ) -> dict[str, Any]:
        return self._http.patch(
            _element_path(graph, "edge", collection, key),
            dict(edge or {}),
            query=pick(options, ELEMENT_WRITE_PARAMS) or None,
            headers=revision_headers(if_match),
        ).get("edge")

    def replace_edge(
        self,
        graph: str,
        collection: str,
        key: str,
        edge: Mapping[str, Any],
        options: GraphElementOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
    ) -> dict[str, Any]:
        path = _element_path(graph, "edge", collection, key)
        _require_edge_ends(edge)
        return self._http.put(
            path,
            dict(edge),
            query=pick(options, ELEMENT_WRITE_PARAMS) or None,
            headers=revision_headers(if_match),
        ).get("edge")

    def delete_edge(
        self,
        graph: str,
        collection: str,
        key: str,
        options: GraphElementOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
    ) -> Any:
        return self._http.delete(
            _element_path(graph, "edge", collection, key),
            query=pick(options, ELEMENT_DELETE_PARAMS) or None,
            headers=revision_headers(if_match),
        )

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def traverse(self, start_vertex: str, options: Mapping[str, Any] | None = None) -> Any:
        """Run a server-side traversal from ``start_vertex`` (a full ``_id``).

        ``options`` uses wire names: ``graphName`` or ``edgeCollection``,
        ``direction``, ``minDepth``/``maxDepth``, ``uniqueness``, ``strategy``
        and the other keys in TRAVERSAL_OPTIONS.
        """
        require(start_vertex, "Graph: start_vertex is required")
        body = {"startVertex": start_vertex, **pick(options, TRAVERSAL_OPTIONS)}
        return self._http.post("/_api/traversal", body)
