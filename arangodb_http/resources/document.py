"""Document CRUD, bulk import and export."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import orjson

from ._base import ResourceAPI, pick, require, resource_exists, revision_headers

DOCUMENT_QUERY_PARAMS = (
    "waitForSync",
    "returnNew",
    "returnOld",
    "silent",
    "overwrite",
    "overwriteMode",
    "keepNull",
    "mergeObjects",
    "refillIndexCaches",
    "versionAttribute",
    "ignoreRevs",
)

IMPORT_QUERY_PARAMS = (
    "type",
    "fromPrefix",
    "toPrefix",
    "overwrite",
    "waitForSync",
    "onDuplicate",
    "complete",
    "details",
)

NDJSON_CONTENT_TYPE = "application/x-ndjson"


@dataclass(slots=True)
class DocumentOptions:
    """Query options for document writes. Only fields that are set are sent."""

    wait_for_sync: bool | None = None
    return_new: bool | None = None
    return_old: bool | None = None
    silent: bool | None = None
    overwrite: bool | None = None
    overwrite_mode: str | None = None
    keep_null: bool | None = None
    merge_objects: bool | None = None
    refill_index_caches: bool | None = None
    version_attribute: str | None = None
    ignore_revs: bool | None = None


@dataclass(slots=True)
class ImportOptions:
    """Options for bulk NDJSON import."""

    type: str | None = None
    from_prefix: str | None = None
    to_prefix: str | None = None
    overwrite: bool | None = None
    wait_for_sync: bool | None = None
    on_duplicate: str | None = None
    complete: bool | None = None
    details: bool | None = None


def document_handle(collection: str, key: str) -> str:
    """Return ``collection/key`` unless ``key`` already is a full handle."""
    return key if "/" in key else f"{collection}/{key}"


def ndjson_payload(documents: Iterable[Mapping[str, Any]]) -> bytes:
    """Serialize documents as newline-delimited JSON."""
    return b"\n".join(orjson.dumps(doc) for doc in documents)


def _query(options: DocumentOptions | Mapping[str, Any] | None) -> dict[str, Any] | None:
    return pick(options, DOCUMENT_QUERY_PARAMS) or None


class DocumentAPI(ResourceAPI):
    """Document operations.

    Every method accepts ``headers``; a stream transaction id passed there
    makes the operation part of that transaction.
    """

    def get(
        self,
        collection: str,
        key: str,
        *,
        if_none_match: str | None = None,
        if_match: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Fetch a document by key or full ``_id`` handle."""
        require(collection, "Document: collection is required")
        require(key, "Document: key is required")

        merged = revision_headers(if_match, headers)
        if if_none_match:
            merged["If-None-Match"] = f'"{if_none_match}"'
        return self._http.get(f"/_api/document/{document_handle(collection, key)}", headers=merged)

    def exists(self, collection: str, key: str) -> bool:
        """Return False only when the server reports the document missing."""
        return resource_exists(lambda: self.get(collection, key))

    def head(self, collection: str, key: str) -> dict[str, str | None]:
        """Return the current revision of a document from its ETag."""
        require(collection, "Document: collection is required")
        require(key, "Document: key is required")

        response = self._http.request("HEAD", f"/_api/document/{document_handle(collection, key)}")
        etag = response.headers.get("etag")
        return {"_rev": etag.replace('"', "") if etag else None}

    def create(
        self,
        collection: str,
        document: Mapping[str, Any],
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        require(collection, "Document: collection is required")
        require(document, "Document: document is required")
        return self._http.post(
            f"/_api/document/{collection}",
            dict(document),
            query=_query(options),
            headers=headers,
        )

    def create_many(
        self,
        collection: str,
        documents: list[Mapping[str, Any]],
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        require(collection, "Document: collection is required")
        require(documents, "Document: documents array is required")
        return self._http.post(
            f"/_api/document/{collection}",
            [dict(doc) for doc in documents],
            query=_query(options),
            headers=headers,
        )

    def replace(
        self,
        collection: str,
        key: str,
        document: Mapping[str, Any],
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Replace a whole document."""
        require(collection, "Document: collection is required")
        require(key, "Document: key is required")
        require(document, "Document: document is required")
        return self._http.put(
            f"/_api/document/{document_handle(collection, key)}",
            dict(document),
            query=_query(options),
            headers=revision_headers(if_match, headers),
        )

    def replace_many(
        self,
        collection: str,
        documents: list[Mapping[str, Any]],
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        require(collection, "Document: collection is required")
        require(documents, "Document: documents array is required")
        return self._http.put(
            f"/_api/document/{collection}",
            [dict(doc) for doc in documents],
            query=_query(options),
            headers=headers,
        )

    def update(
        self,
        collection: str,
        key: str,
        document: Mapping[str, Any],
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Partially update a document."""
        require(collection, "Document: collection is required")
        require(key, "Document: key is required")
        require(document, "Document: document is required")
        return self._http.patch(
            f"/_api/document/{document_handle(collection, key)}",
            dict(document),
            query=_query(options),
            headers=revision_headers(if_match, headers),
        )

    def update_many(
        self,
        collection: str,
        documents: list[Mapping[str, Any]],
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        require(collection, "Document: collection is required")
        require(documents, "Document: documents array is required")
        return self._http.patch(
            f"/_api/document/{collection}",
            [dict(doc) for doc in documents],
            query=_query(options),
            headers=headers,
        )

    def delete(
        self,
        collection: str,
        key: str,
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        if_match: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        require(collection, "Document: collection is required")
        require(key, "Document: key is required")
        return self._http.delete(
            f"/_api/document/{document_handle(collection, key)}",
            query=_query(options),
            headers=revision_headers(if_match, headers),
        )

    def delete_many(
        self,
        collection: str,
        keys: list[Any],
        options: DocumentOptions | Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Delete documents given as keys or ``{"_key": ...}`` selectors."""
        require(collection, "Document: collection is required")
        require(keys, "Document: keys array is required")
        return self._http.request(
            "DELETE",
            f"/_api/document/{collection}",
            body=list(keys),
            query=_query(options),
            headers=headers,
        ).data

    def get_many(
        self,
        collection: str,
        keys: list[Any],
        *,
        ignore_revs: bool = False,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        require(collection, "Document: collection is required")
        require(keys, "Document: keys array is required")

        query: dict[str, Any] = {"onlyget": True}
        if ignore_revs:
            query["ignoreRevs"] = True
        return self._http.put(
            f"/_api/document/{collection}",
            list(keys),
            query=query,
            headers=headers,
        )

    def import_documents(
        self,
        collection: str,
        documents: Iterable[Mapping[str, Any]],
        options: ImportOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """Bulk insert documents through the NDJSON import endpoint.

        Returns:
            Import statistics (created, errors, ...)
        """
        require(collection, "Document: collection is required")
        require(documents, "Document: documents is required")

        query = {"collection": collection, **pick(options, IMPORT_QUERY_PARAMS)}
        return self._http.request(
            "POST",
            "/_api/import",
            raw_body=ndjson_payload(documents),
            content_type=NDJSON_CONTENT_TYPE,
            query=query,
        ).data

    def export(self, collection: str, options: Mapping[str, Any] | None = None) -> Any:
        """Open an export cursor over a whole collection."""
        require(collection, "Document: collection is required")
        body = dict(options or {})
        body["collection"] = collection
        return self._http.post("/_api/export", body)
