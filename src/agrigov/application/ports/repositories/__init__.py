"""Repository ports."""

from agrigov.application.ports.repositories.access_request_repository import (
    AccessRequestRepository,
)
from agrigov.application.ports.repositories.audit_repository import AuditRepository
from agrigov.application.ports.repositories.grant_repository import GrantRepository
from agrigov.application.ports.repositories.permission_set_repository import (
    PermissionSetRepository,
)
from agrigov.application.ports.repositories.role_repository import RoleRepository
from agrigov.application.ports.repositories.subject_repository import SubjectRepository

__all__ = [
    "AccessRequestRepository",
    "AuditRepository",
    "GrantRepository",
    "PermissionSetRepository",
    "RoleRepository",
    "SubjectRepository",
]
