"""Text analyzers used by ArangoSearch."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ._base import ResourceAPI, require, resource_exists

TYPE_IDENTITY = "identity"
TYPE_DELIMITER = "delimiter"
TYPE_STEM = "stem"
TYPE_NORM = "norm"
TYPE_NGRAM = "ngram"
TYPE_TEXT = "text"
TYPE_AQL = "aql"
TYPE_PIPELINE = "pipeline"
TYPE_STOPWORDS = "stopwords"
TYPE_COLLATION = "collation"
TYPE_SEGMENTATION = "segmentation"
TYPE_NEAREST_NEIGHBORS = "nearest_neighbors"
TYPE_CLASSIFICATION = "classification"
TYPE_MINHASH = "minhash"
TYPE_GEOJSON = "geojson"
TYPE_GEOPOINT = "geopoint"
TYPE_GEO_S2 = "geo_s2"
TYPE_WILDCARD = "wildcard"


def _with(properties: Mapping[str, Any] | None, **values: Any) -> dict[str, Any]:
    merged = dict(properties or {})
    merged.update({key: value for key, value in values.items() if value is not None})
    return merged


class AnalyzerAPI(ResourceAPI):
    """Analyzer management plus one ``create_<type>`` shortcut per analyzer type.

    The shortcuts take the type's required settings as arguments; any other
    property can be passed through ``properties`` using wire names.
    """

    def list(self) -> list[dict[str, Any]]:
        return self._http.get("/_api/analyzer").get("result", [])

    def get(self, name: str) -> dict[str, Any]:
        require(name, "Analyzer: name is required")
        return self._http.get(f"/_api/analyzer/{name}")

    def exists(self, name: str) -> bool:
        return resource_exists(lambda: self.get(name))

    def create(
        self,
        name: str,
        analyzer_type: str,
        properties: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Create an analyzer.

        Args:
            name: Analyzer name
            analyzer_type: One of the ``TYPE_*`` constants
            properties: Type-specific settings
            features: Any of ``frequency``, ``norm``, ``position``, ``offset``
        """
        require(name, "Analyzer: name is required")
        require(analyzer_type, "Analyzer: type is required")
        body: dict[str, Any] = {"name": name, "type": analyzer_type}
        if properties:
            body["properties"] = dict(properties)
        if features:
            body["features"] = list(features)
        return self._http.post("/_api/analyzer", body)

    def delete(self, name: str, force: bool = False) -> Any:
        """Delete an analyzer; ``force`` removes it even while views use it."""
        require(name, "Analyzer: name is required")
        query = {"force": True} if force else None
        return self._http.delete(f"/_api/analyzer/{name}", query=query)

    # ------------------------------------------------------------------
    # Typed shortcuts
    # ------------------------------------------------------------------
    def create_identity(self, name: str, features: Sequence[str] | None = None) -> dict[str, Any]:
        return self.create(name, TYPE_IDENTITY, None, features)

    def create_delimiter(self, name: str, delimiter: str, features: Sequence[str] | None = None) -> dict[str, Any]:
        return self.create(name, TYPE_DELIMITER, {"delimiter": delimiter}, features)

    def create_stem(self, name: str, locale: str, features: Sequence[str] | None = None) -> dict[str, Any]:
        return self.create(name, TYPE_STEM, {"locale": locale}, features)

    def create_norm(
        self,
        name: str,
        locale: str,
        case: str | None = None,
        accent: bool | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(name, TYPE_NORM, _with(None, locale=locale, case=case, accent=accent), features)

    def create_ngram(
        self,
        name: str,
        properties: Mapping[str, Any],
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """``properties`` holds ``min``, ``max``, ``preserveOriginal`` and friends."""
        return self.create(name, TYPE_NGRAM, properties, features)

    def create_text(
        self,
        name: str,
        locale: str,
        properties: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(name, TYPE_TEXT, _with(properties, locale=locale), features)

    def create_aql(
        self,
        name: str,
        query_string: str,
        properties: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(name, TYPE_AQL, _with(properties, queryString=query_string), features)

    def create_pipeline(
        self,
        name: str,
        pipeline: Sequence[Mapping[str, Any]],
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """``pipeline`` is a list of ``{"type", "properties"}`` stages."""
        return self.create(name, TYPE_PIPELINE, {"pipeline": [dict(stage) for stage in pipeline]}, features)

    def create_stopwords(
        self,
        name: str,
        stopwords: Sequence[str],
        hex: bool = False,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(name, TYPE_STOPWORDS, {"stopwords": list(stopwords), "hex": hex}, features)

    def create_collation(self, name: str, locale: str, features: Sequence[str] | None = None) -> dict[str, Any]:
        return self.create(name, TYPE_COLLATION, {"locale": locale}, features)

    def create_segmentation(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(name, TYPE_SEGMENTATION, properties, features)

    def create_geojson(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(name, TYPE_GEOJSON, properties, features)

    def create_geopoint(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """``properties`` may name ``latitude``/``longitude`` attribute paths."""
        return self.create(name, TYPE_GEOPOINT, properties, features)

    def create_geo_s2(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(name, TYPE_GEO_S2, properties, features)

    def create_minhash(
        self,
        name: str,
        analyzer: Mapping[str, Any],
        num_hashes: int,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return self.create(
            name, TYPE_MINHASH, {"analyzer": dict(analyzer), "numHashes": num_hashes}, features
        )

    def create_classification(
        self,
        name: str,
        model_location: str,
        top_k: int | None = None,
        threshold: float | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        properties = _with(None, model_location=model_location, top_k=top_k, threshold=threshold)
        return self.create(name, TYPE_CLASSIFICATION, properties, features)

    def create_nearest_neighbors(
        self,
        name: str,
        model_location: str,
        top_k: int | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        properties = _with(None, model_location=model_location, top_k=top_k)
        return self.create(name, TYPE_NEAREST_NEIGHBORS, properties, features)

    def create_wildcard(
        self,
        name: str,
        ngram_size: int,
        analyzer: Mapping[str, Any] | None = None,
        features: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        properties = _with(None, ngramSize=ngram_size, analyzer=dict(analyzer) if analyzer else None)
        return self.create(name, TYPE_WILDCARD, properties, features)
