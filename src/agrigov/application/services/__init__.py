"""Application services shared by the use cases."""

from agrigov.application.services.audit_log import AuditLog
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.application.services.permission_resolver import PermissionResolver

__all__ = ["AuditLog", "GrantLedger", "PermissionResolver"]
