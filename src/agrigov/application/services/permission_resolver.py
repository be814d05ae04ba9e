"""Permission resolver - allow/deny decisions over active grants."""

import logging
from collections.abc import Mapping
from typing import Any

from agrigov.application.services.audit_log import AuditLog
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.domain.catalog import PermissionCatalog
from agrigov.domain.value_objects import AuditAction, AuditSource, Resolution
from agrigov.domain.value_objects.permission_key import (
    ADMIN_PERMISSION,
    WILDCARD,
    category_of,
    category_wildcard,
)

logger = logging.getLogger("agrigov.resolver")


class PermissionResolver:
    """Decides whether a subject holds a permission in a tenant.

    Rules, first match wins:

    1. no valid grant -> deny "no active grants"
    2. `*` or `system.admin` held -> allow "admin access" (conditions skipped)
    3. exact key held -> allow "permission granted" if every condition of the
       catalog definition holds for `context`, else deny "conditions not met"
    4. `category.*` held -> allow "category wildcard"
    5. deny "permission not found"

    Any internal failure yields a "system error" denial. Every decision is
    audited.
    """

    def __init__(
        self,
        catalog: PermissionCatalog,
        grant_ledger: GrantLedger,
        audit_log: AuditLog,
    ) -> None:
        self._catalog = catalog
        self._ledger = grant_ledger
        self._audit_log = audit_log

    async def resolve(
        self,
        subject_id: str,
        tenant_id: str,
        permission: str,
        resource_id: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> Resolution:
        try:
            resolution = await self._evaluate(subject_id, tenant_id, permission, context)
        except Exception:
            logger.exception(
                "Permission check failed for %s/%s on %s", tenant_id, subject_id, permission
            )
            resolution = Resolution(False, Resolution.SYSTEM_ERROR)

        await self._audit_log.log_event(
            subject_id=subject_id,
            tenant_id=tenant_id,
            permission=permission,
            action=AuditAction.PERMISSION_CHECK,
            granted=resolution.allowed,
            reason=resolution.reason,
            source=AuditSource.RESOLVER,
            resource_id=resource_id,
        )
        return resolution

    async def check(
        self,
        subject_id: str,
        tenant_id: str,
        permission: str,
        resource_id: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> bool:
        resolution = await self.resolve(subject_id, tenant_id, permission, resource_id, context)
        return resolution.allowed

    async def _evaluate(
        self,
        subject_id: str,
        tenant_id: str,
        permission: str,
        context: Mapping[str, Any] | None,
    ) -> Resolution:
        grants = await self._ledger.list_active_grants(subject_id, tenant_id)
        if not grants:
            return Resolution(False, Resolution.NO_ACTIVE_GRANTS)

        held: set[str] = set()
        for grant in grants:
            held.update(grant.permissions)

        if WILDCARD in held or ADMIN_PERMISSION in held:
            return Resolution(True, Resolution.ADMIN_ACCESS)

        if permission in held:
            definition = self._catalog.get_permission(permission)
            if definition is not None and definition.conditions:
                ctx = context or {}
                if not all(c.evaluate(ctx) for c in definition.conditions):
                    return Resolution(False, Resolution.CONDITIONS_NOT_MET)
            return Resolution(True, Resolution.PERMISSION_GRANTED)

        if "." in permission and category_wildcard(category_of(permission)) in held:
            return Resolution(True, Resolution.CATEGORY_WILDCARD)

        return Resolution(False, Resolution.PERMISSION_NOT_FOUND)
