"""Assign role use case."""

from datetime import datetime

from agrigov.application.ports import PermissionChecker
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.domain.entities import Grant
from agrigov.domain.exceptions import Forbidden
from agrigov.domain.value_objects.permission_key import REVIEW_PERMISSION


class AssignRoleUseCase:
    """Grant a catalog role to a subject. Actor must hold permissions.assign."""

    def __init__(self, permission_checker: PermissionChecker, grant_ledger: GrantLedger) -> None:
        self._permission_checker = permission_checker
        self._ledger = grant_ledger

    async def execute(
        self,
        actor_id: str,
        tenant_id: str,
        subject_id: str,
        role: str,
        expires_at: datetime | None = None,
        reason: str = "",
    ) -> Grant:
        if not await self._permission_checker.check(actor_id, tenant_id, REVIEW_PERMISSION):
            raise Forbidden("User cannot assign roles in this tenant")
        return await self._ledger.assign_role(
            subject_id,
            tenant_id,
            role,
            granted_by=actor_id,
            reason=reason,
            expires_at=expires_at,
        )
