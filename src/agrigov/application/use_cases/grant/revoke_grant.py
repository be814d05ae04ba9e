"""Revoke grant use case."""

from uuid import UUID

from agrigov.application.ports import PermissionChecker
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.domain.entities import Grant
from agrigov.domain.exceptions import Forbidden, NotFound
from agrigov.domain.value_objects.permission_key import REVOKE_PERMISSION


class RevokeGrantUseCase:
    """Deactivate a grant early. Actor must hold permissions.revoke."""

    def __init__(self, permission_checker: PermissionChecker, grant_ledger: GrantLedger) -> None:
        self._permission_checker = permission_checker
        self._ledger = grant_ledger

    async def execute(
        self,
        actor_id: str,
        tenant_id: str,
        grant_id: UUID,
        reason: str = "",
    ) -> Grant:
        if not await self._permission_checker.check(actor_id, tenant_id, REVOKE_PERMISSION):
            raise Forbidden("User cannot revoke grants in this tenant")
        grant = await self._ledger.get_grant(grant_id)
        if grant.tenant_id != tenant_id:
            raise NotFound("Grant", str(grant_id))
        return await self._ledger.deactivate(grant_id, actor=actor_id, reason=reason)
