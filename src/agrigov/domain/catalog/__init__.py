"""Permission catalog."""

from agrigov.domain.catalog.registry import PermissionCatalog, build_system_catalog

__all__ = ["PermissionCatalog", "build_system_catalog"]
