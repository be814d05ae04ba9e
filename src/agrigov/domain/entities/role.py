"""Role entity - named bundle of permissions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Role:
    """Role - owner, manager, worker... System roles cannot be edited or deleted."""

    key: str
    name: str
    description: str
    permissions: tuple[str, ...]
    is_system: bool = True
    can_delegate: bool = False
    max_users: int | None = None
    tenant_id: str | None = None
