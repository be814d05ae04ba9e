"""Immutable permission/role registry, built once and passed to every component."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from agrigov.domain.catalog.definitions import (
    DEFAULT_EXPECTED_PERMISSION_COUNT,
    EXPECTED_PERMISSION_COUNTS,
    SYSTEM_PERMISSIONS,
    SYSTEM_ROLES,
)
from agrigov.domain.entities import Permission, Role
from agrigov.domain.exceptions import NotFound
from agrigov.domain.value_objects.permission_key import (
    WILDCARD,
    category_of,
    is_wildcard,
)


class PermissionCatalog:
    """Read-only registry of permissions and roles.

    Role references are validated on construction: every permission a role
    names must be a known key, `*`, or `category.*` for a known category.
    """

    __slots__ = ("_permissions", "_roles", "_categories", "_expected_counts")

    def __init__(
        self,
        permissions: Iterable[Permission],
        roles: Iterable[Role] = (),
        expected_counts: Mapping[str, int] | None = None,
    ) -> None:
        by_key: dict[str, Permission] = {}
        for permission in permissions:
            if permission.key in by_key:
                raise ValueError(f"Duplicate permission: {permission.key}")
            by_key[permission.key] = permission
        categories = frozenset(category_of(key) for key in by_key)

        by_role: dict[tuple[str | None, str], Role] = {}
        for role in roles:
            ident = (role.tenant_id, role.key)
            if ident in by_role:
                raise ValueError(f"Duplicate role: {role.key}")
            for key in role.permissions:
                if key in by_key:
                    continue
                if is_wildcard(key) and (key == WILDCARD or category_of(key) in categories):
                    continue
                raise ValueError(f"Role {role.key!r} references unknown permission {key!r}")
            by_role[ident] = role

        self._permissions = MappingProxyType(by_key)
        self._roles = MappingProxyType(by_role)
        self._categories = categories
        self._expected_counts = MappingProxyType(dict(expected_counts or {}))

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, name):
            raise AttributeError("PermissionCatalog is immutable")
        super().__setattr__(name, value)

    def get_permission(self, key: str) -> Permission | None:
        return self._permissions.get(key)

    def require_permission(self, key: str) -> Permission:
        permission = self._permissions.get(key)
        if permission is None:
            raise NotFound("Permission", key)
        return permission

    def has_permission(self, key: str) -> bool:
        return key in self._permissions

    def get_role(self, key: str, tenant_id: str | None = None) -> Role | None:
        """Tenant-scoped custom roles shadow system roles of the same key."""
        if tenant_id is not None:
            role = self._roles.get((tenant_id, key))
            if role is not None:
                return role
        return self._roles.get((None, key))

    def require_role(self, key: str, tenant_id: str | None = None) -> Role:
        role = self.get_role(key, tenant_id)
        if role is None:
            raise NotFound("Role", key)
        return role

    def permissions(self) -> list[Permission]:
        return list(self._permissions.values())

    def roles(self, tenant_id: str | None = None) -> list[Role]:
        """System roles plus the custom roles of `tenant_id`."""
        return [r for r in self._roles.values() if r.tenant_id in (None, tenant_id)]

    @property
    def categories(self) -> frozenset[str]:
        return self._categories

    def expected_permission_count(self, role_key: str | None) -> int:
        if role_key is None:
            return DEFAULT_EXPECTED_PERMISSION_COUNT
        return self._expected_counts.get(role_key, DEFAULT_EXPECTED_PERMISSION_COUNT)

    def with_roles(self, roles: Iterable[Role]) -> "PermissionCatalog":
        """New catalog with additional (e.g. tenant custom) roles."""
        return PermissionCatalog(
            self._permissions.values(),
            [*self._roles.values(), *roles],
            self._expected_counts,
        )


def build_system_catalog() -> PermissionCatalog:
    """Catalog of the built-in farm permissions and roles."""
    return PermissionCatalog(
        SYSTEM_PERMISSIONS,
        SYSTEM_ROLES,
        EXPECTED_PERMISSION_COUNTS,
    )
