"""Exception taxonomy for the ArangoDB HTTP client.

Every failure raised by this package derives from :class:`ArangoError` so
callers can catch the whole family at once, or one of the four kinds below
to decide whether a retry makes sense:

- ArangoConfigurationError: bad configuration or arguments, raised before
  any network activity.
- ArangoConnectionError: the request never produced a response (DNS,
  refused connection, timeout).
- ArangoApplicationError: the server answered with a JSON error envelope
  (``error: true`` plus ``errorNum``/``errorMessage``).
- ArangoHttpError: HTTP status >= 400 without an error envelope.

Secrets (passwords, tokens) are never included in exception messages.
"""

from __future__ import annotations

from typing import Any

# errorNum values the server uses for missing resources
NOT_FOUND_ERROR_NUMS = frozenset({
    1202,  # document not found
    1203,  # collection or view not found
    1212,  # index not found
    1228,  # database not found
    1703,  # user not found
    1924,  # graph not found
    3009,  # service not found
})


class ArangoError(RuntimeError):
    """Base exception for all ArangoDB client errors."""


class ArangoConfigurationError(ArangoError, ValueError):
    """Raised for invalid configuration or missing required arguments."""


class ConfigValidationError(ArangoConfigurationError):
    """Configuration validation errors with per-field details."""

    def __init__(self, message: str, errors: list[str]):
        self.errors = errors
        if errors:
            message = f"{message}: {'; '.join(errors)}"
        super().__init__(message)


class ArangoConnectionError(ArangoError):
    """Raised when the server could not be reached or did not answer in time."""

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class ArangoApplicationError(ArangoError):
    """Raised when the server reports an error in the response body."""

    def __init__(
        self,
        error_num: int,
        error_message: str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"ArangoDB error {error_num}: {error_message}")
        self.error_num = error_num
        self.error_message = error_message
        self.status_code = status_code
        self.details = details or {}


class ArangoHttpError(ArangoError):
    """Raised when the ArangoDB HTTP API reports a non-envelope failure."""

    def __init__(self, status_code: int, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"ArangoDB HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.details = details or {}


def is_not_found(exc: BaseException) -> bool:
    """Return True if ``exc`` means the addressed resource does not exist."""

    if isinstance(exc, ArangoApplicationError):
        return exc.status_code == 404 or exc.error_num in NOT_FOUND_ERROR_NUMS
    if isinstance(exc, ArangoHttpError):
        return exc.status_code == 404
    return False


__all__ = [
    "ArangoApplicationError",
    "ArangoConfigurationError",
    "ArangoConnectionError",
    "ArangoError",
    "ArangoHttpError",
    "ConfigValidationError",
    "NOT_FOUND_ERROR_NUMS",
    "is_not_found",
]
