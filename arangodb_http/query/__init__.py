"""AQL query execution and cursor pagination."""

from .cursor import Cursor, QueryAPI, QueryOptions, build_cursor_body

__all__ = ["Cursor", "QueryAPI", "QueryOptions", "build_cursor_body"]
