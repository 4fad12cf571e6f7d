"""Shared plumbing for resource wrappers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import fields
from typing import Any

from ..errors import ArangoConfigurationError, ArangoError, is_not_found
from ..transport.http_client import ArangoHttpClient


def require(value: Any, message: str) -> None:
    """Raise ArangoConfigurationError when a required argument is empty."""
    if value is None or value == "" or (isinstance(value, (list, tuple)) and not value):
        raise ArangoConfigurationError(message)


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def pick(options: Any, allowed: Iterable[str]) -> dict[str, Any]:
    """
    Select the set options named in ``allowed`` (wire names).

    ``options`` may be None, a mapping keyed by wire names, or a dataclass
    whose snake_case fields map onto the wire names.
    """
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        options = {
            camel_case(f.name): getattr(options, f.name)
            for f in fields(options)
        }
    return {name: options[name] for name in allowed if options.get(name) is not None}


class ResourceAPI:
    """Base for wrappers holding a shared (not owned) transport reference."""

    def __init__(self, http: ArangoHttpClient) -> None:
        self._http = http


def resource_exists(fetch: Callable[[], Any]) -> bool:
    """
    Run ``fetch`` and report whether the addressed resource exists.

    Only a not-found answer maps to False; connection failures and other
    errors propagate.
    """
    try:
        fetch()
    except ArangoError as exc:
        if is_not_found(exc):
            return False
        raise
    return True


def revision_headers(revision: str | None, headers: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy ``headers`` and add an ``If-Match`` precondition for ``revision``."""
    merged = dict(headers or {})
    if revision:
        merged["If-Match"] = f'"{revision}"'
    return merged
