"""Unit tests for arangodb_http.errors."""

import pytest

from arangodb_http.errors import (
    ArangoApplicationError,
    ArangoConfigurationError,
    ArangoConnectionError,
    ArangoError,
    ArangoHttpError,
    ConfigValidationError,
    is_not_found,
)


class TestTaxonomy:
    """The four failure kinds share one base."""

    @pytest.mark.parametrize(
        "error_class",
        [ArangoConfigurationError, ArangoConnectionError, ArangoApplicationError, ArangoHttpError],
    )
    def test_all_errors_are_arango_errors(self, error_class: type) -> None:
        assert issubclass(error_class, ArangoError)
        assert issubclass(error_class, RuntimeError)

    def test_configuration_error_is_value_error(self) -> None:
        assert issubclass(ArangoConfigurationError, ValueError)

    def test_kinds_are_distinct(self) -> None:
        """Application and HTTP failures must not be confused."""
        assert not issubclass(ArangoApplicationError, ArangoHttpError)
        assert not issubclass(ArangoHttpError, ArangoApplicationError)


class TestArangoApplicationError:
    def test_stores_error_fields(self) -> None:
        error = ArangoApplicationError(1203, "collection not found", status_code=404)
        assert error.error_num == 1203
        assert error.error_message == "collection not found"
        assert error.status_code == 404
        assert error.details == {}

    def test_message_includes_error_num(self) -> None:
        error = ArangoApplicationError(1210, "unique constraint violated")
        assert "1210" in str(error)
        assert "unique constraint violated" in str(error)


class TestArangoHttpError:
    def test_stores_status_code(self) -> None:
        error = ArangoHttpError(404, "Not Found")
        assert error.status_code == 404
        assert error.message == "Not Found"

    def test_message_includes_status(self) -> None:
        error = ArangoHttpError(503, "Service Unavailable")
        assert "503" in str(error)
        assert "Service Unavailable" in str(error)


class TestConfigValidationError:
    def test_joins_errors_into_message(self) -> None:
        error = ConfigValidationError("Invalid configuration", ["endpoint is required", "bad timeout"])
        assert error.errors == ["endpoint is required", "bad timeout"]
        assert "endpoint is required; bad timeout" in str(error)

    def test_is_configuration_error(self) -> None:
        assert isinstance(ConfigValidationError("x", []), ArangoConfigurationError)


class TestIsNotFound:
    @pytest.mark.parametrize("error_num", [1202, 1203, 1212, 1228, 1703])
    def test_not_found_error_nums(self, error_num: int) -> None:
        assert is_not_found(ArangoApplicationError(error_num, "missing", status_code=400))

    def test_application_error_with_404_status(self) -> None:
        assert is_not_found(ArangoApplicationError(9999, "gone", status_code=404))

    def test_http_404(self) -> None:
        assert is_not_found(ArangoHttpError(404, "Not Found"))

    def test_other_failures_are_not_not_found(self) -> None:
        assert not is_not_found(ArangoApplicationError(1210, "conflict", status_code=409))
        assert not is_not_found(ArangoHttpError(500, "boom"))
        assert not is_not_found(ArangoConnectionError("refused"))
        assert not is_not_found(ValueError("unrelated"))
