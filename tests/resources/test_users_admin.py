"""Unit tests for UserAPI and AdminAPI."""

import orjson
import pytest

from arangodb_http.errors import ArangoConfigurationError
from arangodb_http.resources import AdminAPI, UserAPI

ENDPOINT = "http://arango:8529"


@pytest.fixture
def users(http) -> UserAPI:
    return UserAPI(http)


@pytest.fixture
def admin(http) -> AdminAPI:
    return AdminAPI(http)


class TestUserAPI:
    """User endpoints are server-global."""

    def test_create(self, users, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"user": "ada"}, 201)

        users.create("ada", "pw", active=True, extra={"team": "eng"})

        method, url, content, _ = sent()
        assert (method, url) == ("POST", f"{ENDPOINT}/_api/user")
        assert orjson.loads(content) == {"user": "ada", "passwd": "pw", "active": True, "extra": {"team": "eng"}}

    def test_list(self, users, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond({"result": [{"user": "root"}]})
        assert users.list() == [{"user": "root"}]

    def test_exists_not_found(self, users, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond(
            {"error": True, "errorNum": 1703, "errorMessage": "user not found"}, 404
        )
        assert users.exists("ghost") is False

    def test_grant_database(self, users, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"shop": "ro"})

        users.grant_database("ada", "shop", read_only=True)

        method, url, content, _ = sent()
        assert (method, url) == ("PUT", f"{ENDPOINT}/_api/user/ada/database/shop")
        assert orjson.loads(content) == {"grant": "ro"}

    def test_revoke_collection(self, users, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({})

        users.revoke_collection("ada", "shop", "orders")

        assert sent()[1] == f"{ENDPOINT}/_api/user/ada/database/shop/orders"
        assert orjson.loads(sent()[2]) == {"grant": "none"}

    def test_get_database_permission(self, users, mock_httpx, respond) -> None:
        mock_httpx.request.return_value = respond({"result": "rw"})
        assert users.get_database_permission("ada", "shop") == "rw"

    def test_invalid_permission(self, users, mock_httpx) -> None:
        with pytest.raises(ArangoConfigurationError, match="permission"):
            users.set_database_permission("ada", "shop", "admin")
        mock_httpx.request.assert_not_called()

    def test_list_permissions_full(self, users, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"result": {"shop": {"permission": "rw"}}})

        assert users.list_permissions("ada", full=True) == {"shop": {"permission": "rw"}}
        assert sent()[1] == f"{ENDPOINT}/_api/user/ada/database?full=true"


class TestAdminAPI:
    def test_version_is_global(self, admin, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"server": "arango", "version": "3.12.0"})

        assert admin.version(details=True)["version"] == "3.12.0"
        assert sent()[1] == f"{ENDPOINT}/_api/version?details=true"

    def test_server_role(self, admin, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"role": "SINGLE"})
        admin.server_role()
        assert sent()[1] == f"{ENDPOINT}/_admin/server/role"

    def test_metrics_text(self, admin, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond(text="arangodb_client_connection_statistics_total 3\n")

        assert admin.metrics().startswith("arangodb_client_connection_statistics_total")
        assert sent()[3]["Accept"] == "text/plain"

    def test_set_log_level(self, admin, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"queries": "debug"})

        admin.set_log_level({"queries": "debug"}, server_id="PRMR-1")

        method, url, content, _ = sent()
        assert (method, url) == ("PUT", f"{ENDPOINT}/_admin/log/level?serverId=PRMR-1")
        assert orjson.loads(content) == {"queries": "debug"}

    def test_set_server_mode(self, admin, mock_httpx, respond, sent) -> None:
        mock_httpx.request.return_value = respond({"mode": "readonly"})
        admin.set_server_mode("readonly")
        assert orjson.loads(sent()[2]) == {"mode": "readonly"}
