"""Permission set entity - the permissions a grant carries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class PermissionSet:
    """Permission set referenced by grants (one per role assignment or temporary grant)."""

    id: UUID
    tenant_id: str
    name: str
    description: str
    permissions: tuple[str, ...]
    created_at: datetime
    is_system: bool = False
