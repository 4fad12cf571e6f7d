"""URL routing and query-string encoding for the REST API."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

# Server-global endpoints; every other path is scoped to a database.
GLOBAL_PATH_PREFIXES = (
    "/_db/",
    "/_api/database",
    "/_api/version",
    "/_api/engine",
    "/_admin/",
    "/_api/user",
)

QueryValue = str | int | float | bool | None
QueryParams = Mapping[str, QueryValue | Sequence[QueryValue]]


def is_global_path(path: str) -> bool:
    """Return True if ``path`` must be sent without a ``/_db/<name>`` prefix."""
    return path.startswith(GLOBAL_PATH_PREFIXES)


def database_path(path: str, database: str) -> str:
    """Prefix ``path`` with ``/_db/<database>`` unless it is server-global."""
    if is_global_path(path):
        return path
    return f"/_db/{database}{path}"


def _encode_component(value: Any) -> str:
    # unreserved characters per RFC 3986: A-Z a-z 0-9 - . _ ~
    return quote(str(value), safe="")


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: QueryParams | None) -> str:
    """
    Encode query parameters into a ``key=value&...`` string.

    Booleans are written as ``true``/``false``. A list or tuple value becomes
    one ``key=value`` pair per item, in item order. ``None`` values are
    dropped. Keys and values are percent-encoded.
    """
    if not params:
        return ""

    parts: list[str] = []
    for key, value in params.items():
        items = value if isinstance(value, (list, tuple)) else (value,)
        for item in items:
            if item is None:
                continue
            parts.append(f"{_encode_component(key)}={_encode_component(_format_scalar(item))}")
    return "&".join(parts)


def build_query_string(params: QueryParams | None) -> str:
    """Return ``?`` followed by the encoded parameters, or ``""`` when empty."""
    encoded = encode_query(params)
    return f"?{encoded}" if encoded else ""
