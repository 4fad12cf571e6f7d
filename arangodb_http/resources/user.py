"""User management and access permissions (server-global endpoints)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import ArangoConfigurationError
from ._base import ResourceAPI, require, resource_exists

PERMISSIONS = ("rw", "ro", "none")


class UserAPI(ResourceAPI):
    """Users and their database/collection grants."""

    def list(self) -> list[dict[str, Any]]:
        return self._http.get("/_api/user").get("result", [])

    def get(self, username: str) -> Any:
        require(username, "User: username is required")
        return self._http.get(f"/_api/user/{username}")

    def exists(self, username: str) -> bool:
        return resource_exists(lambda: self.get(username))

    def create(
        self,
        username: str,
        password: str = "",
        *,
        active: bool | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> Any:
        require(username, "User: username is required")
        body: dict[str, Any] = {"user": username, "passwd": password}
        if active is not None:
            body["active"] = active
        if extra:
            body["extra"] = dict(extra)
        return self._http.post("/_api/user", body)

    def replace(
        self,
        username: str,
        password: str = "",
        *,
        active: bool | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> Any:
        require(username, "User: username is required")
        body: dict[str, Any] = {"passwd": password}
        if active is not None:
            body["active"] = active
        if extra:
            body["extra"] = dict(extra)
        return self._http.put(f"/_api/user/{username}", body)

    def update(self, username: str, changes: Mapping[str, Any]) -> Any:
        """Partially update a user (``passwd``, ``active``, ``extra``)."""
        require(username, "User: username is required")
        return self._http.patch(f"/_api/user/{username}", dict(changes or {}))

    def delete(self, username: str) -> Any:
        require(username, "User: username is required")
        return self._http.delete(f"/_api/user/{username}")

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------
    def list_permissions(self, username: str, full: bool = False) -> Any:
        """Database permissions of a user; ``full`` adds collection permissions."""
        require(username, "User: username is required")
        query = {"full": True} if full else None
        return self._http.get(f"/_api/user/{username}/database", query=query).get("result")

    def get_database_permission(self, username: str, database: str) -> str:
        return self._http.get(self._grant_path(username, database)).get("result")

    def set_database_permission(self, username: str, database: str, permission: str) -> Any:
        _check_permission(permission)
        return self._http.put(self._grant_path(username, database), {"grant": permission})

    def clear_database_permission(self, username: str, database: str) -> Any:
        return self._http.delete(self._grant_path(username, database))

    def get_collection_permission(self, username: str, database: str, collection: str) -> str:
        return self._http.get(self._grant_path(username, database, collection)).get("result")

    def set_collection_permission(self, username: str, database: str, collection: str, permission: str) -> Any:
        _check_permission(permission)
        return self._http.put(self._grant_path(username, database, collection), {"grant": permission})

    def clear_collection_permission(self, username: str, database: str, collection: str) -> Any:
        return self._http.delete(self._grant_path(username, database, collection))

    def grant_database(self, username: str, database: str, read_only: bool = False) -> Any:
        return self.set_database_permission(username, database, "ro" if read_only else "rw")

    def revoke_database(self, username: str, database: str) -> Any:
        return self.set_database_permission(username, database, "none")

    def grant_collection(self, username: str, database: str, collection: str, read_only: bool = False) -> Any:
        return self.set_collection_permission(username, database, collection, "ro" if read_only else "rw")

    def revoke_collection(self, username: str, database: str, collection: str) -> Any:
        return self.set_collection_permission(username, database, collection, "none")

    @staticmethod
    def _grant_path(username: str, database: str, collection: str | None = None) -> str:
        require(username, "User: username is required")
        require(database, "User: database is required")
        path = f"/_api/user/{username}/database/{database}"
        if collection is not None:
            require(collection, "User: collection is required")
            path = f"{path}/{collection}"
        return path


def _check_permission(permission: str) -> None:
    require(permission, "User: permission is required")
    if permission not in PERMISSIONS:
        raise ArangoConfigurationError(
            f"User: permission must be one of {', '.join(PERMISSIONS)}, got {permission!r}"
        )
