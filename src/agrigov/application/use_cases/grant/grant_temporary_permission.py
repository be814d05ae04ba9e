"""Grant temporary permission use case."""

from datetime import datetime

from agrigov.application.ports import PermissionChecker
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.domain.entities import Grant
from agrigov.domain.exceptions import Forbidden
from agrigov.domain.value_objects.permission_key import DELEGATE_PERMISSION, REVIEW_PERMISSION


class GrantTemporaryPermissionUseCase:
    """Grant one permission until a given time.

    Allowed with permissions.assign, or with permissions.delegate when the
    actor holds the permission being handed on.
    """

    def __init__(self, permission_checker: PermissionChecker, grant_ledger: GrantLedger) -> None:
        self._permission_checker = permission_checker
        self._ledger = grant_ledger

    async def execute(
        self,
        actor_id: str,
        tenant_id: str,
        subject_id: str,
        permission: str,
        expires_at: datetime,
        reason: str,
    ) -> Grant:
        if not await self._may_grant(actor_id, tenant_id, permission):
            raise Forbidden(f"User cannot grant {permission} in this tenant")
        return await self._ledger.grant_temporary_permission(
            subject_id,
            tenant_id,
            permission,
            expires_at,
            reason,
            granted_by=actor_id,
        )

    async def _may_grant(self, actor_id: str, tenant_id: str, permission: str) -> bool:
        check = self._permission_checker.check
        if await check(actor_id, tenant_id, REVIEW_PERMISSION):
            return True
        return await check(actor_id, tenant_id, DELEGATE_PERMISSION) and await check(
            actor_id, tenant_id, permission
        )
