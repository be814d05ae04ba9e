"""Permission checker port - authorization of operator actions."""

from typing import Any, Protocol


class PermissionChecker(Protocol):
    """Port for checking whether a subject holds a permission in a tenant."""

    async def check(
        self,
        subject_id: str,
        tenant_id: str,
        permission: str,
        resource_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> bool: ...
