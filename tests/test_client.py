"""Unit tests for the ArangoClient facade."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from arangodb_http import ArangoClient, ArangoClientConfig
from arangodb_http.errors import ArangoConfigurationError, ConfigValidationError

ENDPOINT = "http://arango:8529"


@pytest.fixture
def client(mock_httpx: MagicMock) -> ArangoClient:
    return ArangoClient(endpoint=ENDPOINT, username="root", password="secret", database="test_db")


class TestConstruction:
    """Tests for ArangoClient initialization."""

    def test_keyword_options(self, client: ArangoClient) -> None:
        assert client.config.endpoint == ENDPOINT
        assert client.database == "test_db"

    def test_config_object(self, mock_httpx: MagicMock) -> None:
        config = ArangoClientConfig(endpoint=ENDPOINT, token="jwt")
        assert ArangoClient(config).config is config

    def test_config_and_options_are_exclusive(self, mock_httpx: MagicMock) -> None:
        config = ArangoClientConfig(endpoint=ENDPOINT, token="jwt")
        with pytest.raises(TypeError):
            ArangoClient(config, database="other")

    def test_missing_auth_fails_before_network(self) -> None:
        with patch("arangodb_http.transport.http_client.httpx.Client") as mock_client_class:
            with pytest.raises(ConfigValidationError, match="authentication required"):
                ArangoClient(endpoint=ENDPOINT)
        mock_client_class.assert_not_called()

    @pytest.mark.parametrize("endpoint", ["", "arango:8529"])
    def test_invalid_endpoint_in_config_object(self, endpoint: str) -> None:
        config = ArangoClientConfig(endpoint=endpoint, username="root")
        with patch("arangodb_http.transport.http_client.httpx.Client") as mock_client_class:
            with pytest.raises(ArangoConfigurationError, match="endpoint"):
                ArangoClient(config)
        mock_client_class.assert_not_called()

    def test_missing_endpoint(self) -> None:
        with pytest.raises(ArangoConfigurationError):
            ArangoClient(username="root")

    def test_from_env(self, mock_httpx: MagicMock) -> None:
        env = {"ARANGO_URL": ENDPOINT, "ARANGO_TOKEN": "jwt", "ARANGO_DATABASE": "envdb"}
        with patch.dict("os.environ", env, clear=True):
            client = ArangoClient.from_env()
        assert client.database == "envdb"
        assert client.config.auth_scheme == "bearer"

    def test_from_file(self, mock_httpx: MagicMock, tmp_path) -> None:
        path = tmp_path / "arango.yml"
        path.write_text(f"endpoint: {ENDPOINT}\nusername: root\n")
        assert ArangoClient.from_file(path).config.username == "root"

    def test_resources_share_transport(self, client: ArangoClient) -> None:
        apis = (
            client.db,
            client.collection,
            client.document,
            client.index,
            client.user,
            client.admin,
            client.graph,
            client.view,
            client.analyzer,
            client.foxx,
        )
        for api in apis:
            assert api._http is client.http

    def test_repr_hides_credentials(self, client: ArangoClient) -> None:
        assert repr(client) == f"ArangoClient('{ENDPOINT}', database='test_db')"


class TestDatabaseSwitching:
    def test_use_database(self, client, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"result": []})

        client.use_database("shop")
        client.collection.list()

        assert client.database == "shop"
        assert sent()[1] == f"{ENDPOINT}/_db/shop/_api/collection"

    def test_per_call_override_keeps_default(self, client, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"result": []})

        client.get("/_api/collection", database="archive")

        assert sent()[1] == f"{ENDPOINT}/_db/archive/_api/collection"
        assert client.database == "test_db"


class TestServer:
    def test_version(self, client, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"server": "arango", "version": "3.12.0"})

        assert client.version()["version"] == "3.12.0"
        assert sent()[1] == f"{ENDPOINT}/_api/version"

    def test_is_available(self, client, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond({"version": "3.12.0"})
        assert client.is_available() is True

    def test_is_available_connection_error(self, client, mock_httpx) -> None:
        mock_httpx.request.side_effect = httpx.ConnectError("refused")
        assert client.is_available() is False

    def test_is_available_unauthorized(self, client, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond(
            {"error": True, "errorNum": 11, "errorMessage": "not authorized"}, 401
        )
        assert client.is_available() is False

    def test_context_manager_closes(self, mock_httpx: MagicMock) -> None:
        with ArangoClient(endpoint=ENDPOINT, token="jwt"):
            pass
        mock_httpx.close.assert_called_once()
