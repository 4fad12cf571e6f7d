"""Foxx microservice management."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ._base import ResourceAPI, pick, require, resource_exists

ZIP_CONTENT_TYPE = "application/zip"
JS_CONTENT_TYPE = "application/javascript"

INSTALL_PARAMS = ("development", "setup", "legacy")
REPLACE_PARAMS = ("teardown", "setup", "legacy", "force")


@dataclass(slots=True)
class ServiceOptions:
    """Options for installing, replacing or upgrading a service.

    ``development`` only applies to installs and ``teardown``/``force``
    only to replace and upgrade.
    """

    development: bool | None = None
    setup: bool | None = None
    teardown: bool | None = None
    legacy: bool | None = None
    force: bool | None = None
    configuration: Mapping[str, Any] | None = None
    dependencies: Mapping[str, Any] | None = None


def _require_mount(mount: str) -> None:
    require(mount, "Foxx: mount is required")


def _service_body(source: str, options: ServiceOptions | Mapping[str, Any] | None) -> dict[str, Any]:
    require(source, "Foxx: source is required")
    return {"source": source, **pick(options, ("configuration", "dependencies"))}


class FoxxAPI(ResourceAPI):
    """Install and manage Foxx services in the current database.

    Every call identifies the service by its ``mount`` path, sent as a query
    parameter.
    """

    def list(self, exclude_system: bool = False) -> list[dict[str, Any]]:
        query = {"excludeSystem": True} if exclude_system else None
        return self._http.get("/_api/foxx", query=query)

    def get(self, mount: str) -> dict[str, Any]:
        _require_mount(mount)
        return self._http.get("/_api/foxx/service", query={"mount": mount})

    def exists(self, mount: str) -> bool:
        return resource_exists(lambda: self.get(mount))

    # ------------------------------------------------------------------
    # Install / replace / upgrade / uninstall
    # ------------------------------------------------------------------
    def install_from_url(
        self,
        mount: str,
        source: str,
        options: ServiceOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Install from a URL the server can fetch (zip or tar.gz bundle)."""
        _require_mount(mount)
        body = _service_body(source, options)
        return self._http.post("/_api/foxx", body, query={"mount": mount, **pick(options, INSTALL_PARAMS)})

    def install_from_path(
        self,
        mount: str,
        path: str,
        options: ServiceOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Install from a path on the server's filesystem."""
        return self.install_from_url(mount, path, options)

    def install_from_zip(
        self,
        mount: str,
        zip_data: bytes,
        options: ServiceOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Upload a zipped service bundle."""
        return self._upload(mount, zip_data, ZIP_CONTENT_TYPE, options)

    def install_from_js(
        self,
        mount: str,
        code: str,
        options: ServiceOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Install a single-file service from JavaScript source."""
        return self._upload(mount, code, JS_CONTENT_TYPE, options)

    def replace(
        self,
        mount: str,
        source: str,
        options: ServiceOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        _require_mount(mount)
        return self._http.put(
            "/_api/foxx/service",
            _service_body(source, options),
            query={"mount": mount, **pick(options, REPLACE_PARAMS)},
        )

    def upgrade(
        self,
        mount: str,
        source: str,
        options: ServiceOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        _require_mount(mount)
        return self._http.patch(
            "/_api/foxx/service",
            _service_body(source, options),
            query={"mount": mount, **pick(options, REPLACE_PARAMS)},
        )

    def uninstall(self, mount: str, teardown: bool | None = None) -> Any:
        _require_mount(mount)
        return self._http.delete("/_api/foxx/service", query={"mount": mount, "teardown": teardown})

    # ------------------------------------------------------------------
    # Configuration and dependencies
    # ------------------------------------------------------------------
    def get_configuration(self, mount: str) -> dict[str, Any]:
        return self._mounted("GET", "/_api/foxx/configuration", mount)

    def update_configuration(self, mount: str, configuration: Mapping[str, Any]) -> dict[str, Any]:
        return self._mounted("PATCH", "/_api/foxx/configuration", mount, dict(configuration))

    def replace_configuration(self, mount: str, configuration: Mapping[str, Any]) -> dict[str, Any]:
        return self._mounted("PUT", "/_api/foxx/configuration", mount, dict(configuration))

    def get_dependencies(self, mount: str) -> dict[str, Any]:
        return self._mounted("GET", "/_api/foxx/dependencies", mount)

    def update_dependencies(self, mount: str, dependencies: Mapping[str, Any]) -> dict[str, Any]:
        return self._mounted("PATCH", "/_api/foxx/dependencies", mount, dict(dependencies))

    def replace_dependencies(self, mount: str, dependencies: Mapping[str, Any]) -> dict[str, Any]:
        return self._mounted("PUT", "/_api/foxx/dependencies", mount, dict(dependencies))

    # ------------------------------------------------------------------
    # Development mode, scripts and tests
    # ------------------------------------------------------------------
    def enable_development(self, mount: str) -> dict[str, Any]:
        return self._mounted("POST", "/_api/foxx/development", mount, {})

    def disable_development(self, mount: str) -> dict[str, Any]:
        return self._mounted("DELETE", "/_api/foxx/development", mount)

    def list_scripts(self, mount: str) -> dict[str, Any]:
        return self._mounted("GET", "/_api/foxx/scripts", mount)

    def run_script(self, mount: str, name: str, args: Any = None) -> Any:
        require(name, "Foxx: script name is required")
        return self._mounted("POST", f"/_api/foxx/scripts/{name}", mount, {} if args is None else args)

    def run_tests(
        self,
        mount: str,
        reporter: str | None = None,
        idiomatic: bool | None = None,
        filter: str | None = None,
    ) -> Any:
        """Run the service's test suite.

        ``reporter`` is one of ``default``, ``suite``, ``stream``, ``xunit`` or ``tap``.
        """
        _require_mount(mount)
        query = {"mount": mount, "reporter": reporter, "idiomatic": idiomatic, "filter": filter}
        return self._http.post("/_api/foxx/tests", {}, query=query)

    def commit(self, replace: bool = False) -> Any:
        """Commit the local service state to the cluster."""
        query = {"replace": True} if replace else None
        return self._http.post("/_api/foxx/commit", {}, query=query)

    # ------------------------------------------------------------------
    # Documentation and bundle
    # ------------------------------------------------------------------
    def readme(self, mount: str) -> str:
        _require_mount(mount)
        response = self._http.request(
            "GET",
            "/_api/foxx/readme",
            query={"mount": mount},
            headers={"Accept": "text/plain"},
        )
        return response.text

    def swagger(self, mount: str) -> dict[str, Any]:
        return self._mounted("GET", "/_api/foxx/swagger", mount)

    def download(self, mount: str) -> bytes:
        """Download the service bundle as zip bytes."""
        _require_mount(mount)
        response = self._http.request(
            "POST",
            "/_api/foxx/download",
            query={"mount": mount},
            headers={"Accept": ZIP_CONTENT_TYPE},
        )
        return response.body

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _mounted(self, method: str, path: str, mount: str, body: Any = None) -> Any:
        _require_mount(mount)
        return self._http.request(method, path, body=body, query={"mount": mount}).data

    def _upload(
        self,
        mount: str,
        payload: bytes | str,
        content_type: str,
        options: ServiceOptions | Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        _require_mount(mount)
        require(payload, "Foxx: service bundle is required")
        return self._http.request(
            "POST",
            "/_api/foxx",
            raw_body=payload,
            content_type=content_type,
            query={"mount": mount, **pick(options, INSTALL_PARAMS)},
        ).data
