"""Domain entities."""

from agrigov.domain.entities.access_request import AccessRequest
from agrigov.domain.entities.audit_entry import AccessAuditEntry
from agrigov.domain.entities.drift import PermissionDrift
from agrigov.domain.entities.grant import Grant
from agrigov.domain.entities.permission import Permission
from agrigov.domain.entities.permission_set import PermissionSet
from agrigov.domain.entities.role import Role
from agrigov.domain.entities.subject import SubjectProfile

__all__ = [
    "AccessAuditEntry",
    "AccessRequest",
    "Grant",
    "Permission",
    "PermissionDrift",
    "PermissionSet",
    "Role",
    "SubjectProfile",
]
