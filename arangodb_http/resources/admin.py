"""Server administration and monitoring."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ._base import ResourceAPI, require


class AdminAPI(ResourceAPI):
    """Version, server status, statistics, metrics and log levels."""

    def version(self, details: bool = False) -> dict[str, Any]:
        query = {"details": True} if details else None
        return self._http.get("/_api/version", query=query)

    def engine(self) -> dict[str, Any]:
        return self._http.get("/_api/engine")

    def server_id(self) -> Any:
        return self._http.get("/_admin/server/id")

    def server_role(self) -> Any:
        return self._http.get("/_admin/server/role")

    def server_availability(self) -> Any:
        return self._http.get("/_admin/server/availability")

    def server_mode(self) -> Any:
        return self._http.get("/_admin/server/mode")

    def set_server_mode(self, mode: str) -> Any:
        """Switch between ``default`` and ``readonly`` mode."""
        require(mode, "Admin: mode is required")
        return self._http.put("/_admin/server/mode", {"mode": mode})

    def statistics(self) -> Any:
        return self._http.get("/_admin/statistics")

    def metrics(self, server_id: str | None = None) -> str:
        """Return server metrics in Prometheus text format."""
        query = {"serverId": server_id} if server_id else None
        response = self._http.request(
            "GET",
            "/_admin/metrics/v2",
            query=query,
            headers={"Accept": "text/plain"},
        )
        return response.text

    def log_entries(self, options: Mapping[str, Any] | None = None) -> Any:
        """Read server log entries (``upto``, ``level``, ``size``, ``offset``, ``search``, ``sort``)."""
        return self._http.get("/_admin/log/entries", query=dict(options) if options else None)

    def log_level(self, server_id: str | None = None) -> dict[str, str]:
        query = {"serverId": server_id} if server_id else None
        return self._http.get("/_admin/log/level", query=query)

    def set_log_level(self, levels: Mapping[str, str], server_id: str | None = None) -> dict[str, str]:
        """Set log levels per topic, e.g. ``{"queries": "debug"}``."""
        query = {"serverId": server_id} if server_id else None
        return self._http.put("/_admin/log/level", dict(levels), query=query)

    def cluster_health(self) -> Any:
        return self._http.get("/_admin/cluster/health")
