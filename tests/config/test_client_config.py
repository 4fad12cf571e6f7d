"""Unit tests for arangodb_http.config."""

import json

import pytest

from arangodb_http.config import ArangoClientConfig
from arangodb_http.errors import ArangoConfigurationError, ConfigValidationError


class TestArangoClientConfigDefaults:
    """Defaults follow the documented connection settings."""

    def test_default_values(self) -> None:
        config = ArangoClientConfig(endpoint="http://localhost:8529", username="root")
        assert config.database == "_system"
        assert config.password == ""
        assert config.token is None
        assert config.timeout == 30.0
        assert config.keepalive == 60.0
        assert config.pool_size == 100
        assert config.ssl_verify is False
        assert config.http2 is True

    def test_trailing_slash_is_stripped(self) -> None:
        config = ArangoClientConfig(endpoint="http://localhost:8529/", username="root")
        assert config.endpoint == "http://localhost:8529"

    def test_config_is_frozen(self) -> None:
        config = ArangoClientConfig(endpoint="http://localhost:8529", username="root")
        with pytest.raises(Exception):
            config.database = "other"

    def test_secrets_hidden_from_repr(self) -> None:
        config = ArangoClientConfig(endpoint="http://localhost:8529", username="root", password="hunter2")
        assert "hunter2" not in repr(config)


class TestAuthScheme:
    def test_token_wins(self) -> None:
        config = ArangoClientConfig(endpoint="http://h:1", username="root", token="jwt")
        assert config.auth_scheme == "bearer"

    def test_basic_with_username(self) -> None:
        config = ArangoClientConfig(endpoint="http://h:1", username="root", password="pw")
        assert config.auth_scheme == "basic"

    def test_no_scheme(self) -> None:
        config = ArangoClientConfig(endpoint="http://h:1")
        assert config.auth_scheme is None


class TestFromDict:
    def test_valid(self) -> None:
        config = ArangoClientConfig.from_dict({"endpoint": "https://db:8529", "token": "jwt"})
        assert config.endpoint == "https://db:8529"

    def test_missing_auth_fails(self) -> None:
        with pytest.raises(ConfigValidationError, match="authentication required"):
            ArangoClientConfig.from_dict({"endpoint": "http://db:8529"})

    def test_empty_endpoint_fails(self) -> None:
        with pytest.raises(ConfigValidationError, match="endpoint is required"):
            ArangoClientConfig.from_dict({"endpoint": "", "username": "root"})

    def test_missing_endpoint_fails(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            ArangoClientConfig.from_dict({"username": "root"})
        assert any(error.startswith("endpoint") for error in exc_info.value.errors)

    def test_non_http_endpoint_fails(self) -> None:
        with pytest.raises(ConfigValidationError, match="http"):
            ArangoClientConfig.from_dict({"endpoint": "tcp://db:8529", "username": "root"})

    def test_invalid_timeout_fails(self) -> None:
        with pytest.raises(ArangoConfigurationError):
            ArangoClientConfig.from_dict({"endpoint": "http://db:8529", "username": "root", "timeout": 0})

    def test_unknown_field_fails(self) -> None:
        with pytest.raises(ConfigValidationError):
            ArangoClientConfig.from_dict({"endpoint": "http://db:8529", "username": "root", "bogus": 1})

    def test_from_json(self) -> None:
        config = ArangoClientConfig.from_json(json.dumps({"endpoint": "http://db:8529", "username": "u"}))
        assert config.username == "u"

    def test_from_json_invalid(self) -> None:
        with pytest.raises(ConfigValidationError, match="Invalid JSON"):
            ArangoClientConfig.from_json("{not json")

    def test_to_dict_omits_none(self) -> None:
        data = ArangoClientConfig(endpoint="http://db:8529", username="u").to_dict()
        assert "token" not in data
        assert data["endpoint"] == "http://db:8529"


class TestFromFile:
    def test_yaml_file(self, tmp_path) -> None:
        path = tmp_path / "arango.yaml"
        path.write_text("endpoint: http://db:8529/\nusername: root\npassword: pw\ndatabase: shop\n")

        config = ArangoClientConfig.from_file(path)

        assert config.endpoint == "http://db:8529"
        assert config.database == "shop"
        assert config.source == str(path)

    def test_json_file(self, tmp_path) -> None:
        path = tmp_path / "arango.json"
        path.write_text(json.dumps({"endpoint": "http://db:8529", "token": "jwt"}))

        config = ArangoClientConfig.from_file(path)
        assert config.auth_scheme == "bearer"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigValidationError, match="not found"):
            ArangoClientConfig.from_file(tmp_path / "missing.yaml")

    def test_non_mapping_file(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ArangoConfigurationError, match="mapping"):
            ArangoClientConfig.from_file(path)


class TestFromEnv:
    def test_reads_environment(self) -> None:
        env = {
            "ARANGO_URL": "http://env-host:8529",
            "ARANGO_USERNAME": "admin",
            "ARANGO_PASSWORD": "pw",
            "ARANGO_DATABASE": "envdb",
            "ARANGO_TIMEOUT": "12.5",
            "ARANGO_POOL_SIZE": "7",
            "ARANGO_SSL_VERIFY": "true",
        }
        config = ArangoClientConfig.from_env(env)

        assert config.endpoint == "http://env-host:8529"
        assert config.username == "admin"
        assert config.password == "pw"
        assert config.database == "envdb"
        assert config.timeout == 12.5
        assert config.pool_size == 7
        assert config.ssl_verify is True
        assert config.source == "environment"

    def test_token_from_environment(self) -> None:
        config = ArangoClientConfig.from_env({"ARANGO_TOKEN": "jwt"})
        assert config.auth_scheme == "bearer"

    def test_invalid_numbers_fall_back_to_defaults(self) -> None:
        config = ArangoClientConfig.from_env(
            {"ARANGO_USERNAME": "root", "ARANGO_TIMEOUT": "soon", "ARANGO_POOL_SIZE": "many"}
        )
        assert config.timeout == 30.0
        assert config.pool_size == 100

    def test_overrides_win(self) -> None:
        config = ArangoClientConfig.from_env({"ARANGO_USERNAME": "root"}, database="explicit", timeout=None)
        assert config.database == "explicit"
        assert config.timeout == 30.0

    def test_no_credentials_fails(self) -> None:
        with pytest.raises(ConfigValidationError, match="authentication required"):
            ArangoClientConfig.from_env({})
