"""Unit tests for DocumentAPI."""

import httpx
import orjson
import pytest

from arangodb_http.errors import ArangoApplicationError, ArangoConfigurationError, ArangoConnectionError
from arangodb_http.resources import DocumentAPI, DocumentOptions, ImportOptions
from arangodb_http.resources.document import document_handle, ndjson_payload

DOC_URL = "http://arango:8529/_db/test_db/_api/document"


@pytest.fixture
def documents(http) -> DocumentAPI:
    return DocumentAPI(http)


class TestHelpers:
    def test_document_handle(self) -> None:
        assert document_handle("users", "1") == "users/1"
        assert document_handle("users", "users/1") == "users/1"

    def test_ndjson_payload(self) -> None:
        assert ndjson_payload([{"a": 1}, {"b": "x"}]) == b'{"a":1}\n{"b":"x"}'


class TestRead:
    def test_get(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"_key": "1", "name": "Ada"})

        assert documents.get("users", "1")["name"] == "Ada"
        assert sent()[:2] == ("GET", f"{DOC_URL}/users/1")

    def test_get_with_handle_and_revision(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"_key": "1"})

        documents.get("users", "users/1", if_none_match="r1")

        _, url, _, headers = sent()
        assert url == f"{DOC_URL}/users/1"
        assert headers["If-None-Match"] == '"r1"'

    def test_get_requires_key(self, documents, mock_httpx) -> None:
        with pytest.raises(ArangoConfigurationError, match="key is required"):
            documents.get("users", "")
        mock_httpx.request.assert_not_called()

    def test_exists(self, documents, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond({"_key": "1"})
        assert documents.exists("users", "1") is True

    def test_exists_not_found(self, documents, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond(
            {"error": True, "errorNum": 1202, "errorMessage": "document not found"}, 404
        )
        assert documents.exists("users", "missing") is False

    def test_exists_propagates_other_errors(self, documents, mock_httpx) -> None:
        mock_httpx.request.side_effect = httpx.ConnectError("refused")
        with pytest.raises(ArangoConnectionError):
            documents.exists("users", "1")

    def test_head(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond(headers={"etag": '"_abc"'})

        assert documents.head("users", "1") == {"_rev": "_abc"}
        assert sent()[0] == "HEAD"

    def test_get_many(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond([{"_key": "1"}, {"_key": "2"}])

        documents.get_many("users", ["1", "2"], ignore_revs=True)

        method, url, content, _ = sent()
        assert method == "PUT"
        assert url == f"{DOC_URL}/users?onlyget=true&ignoreRevs=true"
        assert orjson.loads(content) == ["1", "2"]


class TestWrite:
    def test_create_with_options(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"_key": "1"}, 201)

        documents.create("users", {"name": "Ada"}, DocumentOptions(return_new=True, overwrite_mode="replace"))

        method, url, content, _ = sent()
        assert method == "POST"
        assert url == f"{DOC_URL}/users?returnNew=true&overwriteMode=replace"
        assert orjson.loads(content) == {"name": "Ada"}

    def test_create_conflict(self, documents, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond(
            {"error": True, "errorNum": 1210, "errorMessage": "unique constraint violated"}, 409
        )
        with pytest.raises(ArangoApplicationError):
            documents.create("users", {"_key": "1"})

    def test_create_many(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond([{"_key": "1"}, {"_key": "2"}], 202)

        documents.create_many("users", [{"a": 1}, {"a": 2}])

        assert orjson.loads(sent()[2]) == [{"a": 1}, {"a": 2}]

    def test_create_many_requires_documents(self, documents) -> None:
        with pytest.raises(ArangoConfigurationError):
            documents.create_many("users", [])

    def test_replace_with_if_match(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"_key": "1"}, 202)

        documents.replace("users", "1", {"name": "Grace"}, if_match="r7")

        method, url, _, headers = sent()
        assert (method, url) == ("PUT", f"{DOC_URL}/users/1")
        assert headers["If-Match"] == '"r7"'

    def test_update(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"_key": "1"}, 202)

        documents.update("users", "1", {"age": 36}, {"keepNull": False, "mergeObjects": True})

        method, url, content, _ = sent()
        assert method == "PATCH"
        assert url == f"{DOC_URL}/users/1?keepNull=false&mergeObjects=true"
        assert orjson.loads(content) == {"age": 36}

    def test_update_many(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond([], 202)
        documents.update_many("users", [{"_key": "1", "a": 2}])
        assert sent()[:2] == ("PATCH", f"{DOC_URL}/users")

    def test_replace_many(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond([], 202)
        documents.replace_many("users", [{"_key": "1", "a": 2}])
        assert sent()[:2] == ("PUT", f"{DOC_URL}/users")

    def test_delete(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"_key": "1"}, 202)

        documents.delete("users", "1", {"returnOld": True})

        assert sent()[:2] == ("DELETE", f"{DOC_URL}/users/1?returnOld=true")

    def test_delete_many_sends_body(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond([], 202)

        documents.delete_many("users", ["1", {"_key": "2"}])

        method, url, content, _ = sent()
        assert (method, url) == ("DELETE", f"{DOC_URL}/users")
        assert orjson.loads(content) == ["1", {"_key": "2"}]


class TestImportExport:
    def test_import_documents(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"created": 2, "errors": 0}, 201)

        stats = documents.import_documents(
            "users", [{"a": 1}, {"a": 2}], ImportOptions(on_duplicate="update", complete=True)
        )

        method, url, content, headers = sent()
        assert method == "POST"
        assert url == "http://arango:8529/_db/test_db/_api/import?collection=users&onDuplicate=update&complete=true"
        assert content == b'{"a":1}\n{"a":2}'
        assert headers["Content-Type"] == "application/x-ndjson"
        assert stats["created"] == 2

    def test_export(self, documents, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"result": [], "hasMore": False}, 201)

        documents.export("users", {"batchSize": 100})

        assert sent()[1] == "http://arango:8529/_db/test_db/_api/export"
        assert orjson.loads(sent()[2]) == {"batchSize": 100, "collection": "users"}
