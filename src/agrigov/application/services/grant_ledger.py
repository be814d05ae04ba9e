"""Grant ledger - authoritative store of who holds which permission set."""

import logging
from datetime import datetime
from uuid import UUID, uuid4

from agrigov.application.ports import Clock, UnitOfWork
from agrigov.application.services.audit_log import AuditLog
from agrigov.domain.catalog import PermissionCatalog
from agrigov.domain.entities import Grant, PermissionSet
from agrigov.domain.exceptions import NotFound, ValidationError
from agrigov.domain.value_objects import AuditAction, AuditSource
from agrigov.domain.value_objects.permission_key import TEMPORARY_ROLE

logger = logging.getLogger("agrigov.ledger")


class GrantLedger:
    """Creates, lists and deactivates grants.

    Validity is computed at read time: a grant counts as active only while
    its flag is set and its expiry lies in the future.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog: PermissionCatalog,
        audit_log: AuditLog,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog = catalog
        self._audit_log = audit_log
        self._clock = clock

    async def list_active_grants(self, subject_id: str, tenant_id: str) -> list[Grant]:
        now = self._clock.now_utc()
        async with self._uow_factory() as uow:
            grants = await uow.grants.list_for_subject(subject_id, tenant_id)
        return [g for g in grants if g.is_valid_at(now)]

    async def list_tenant_grants(self, tenant_id: str) -> list[Grant]:
        """Currently valid grants of every subject in the tenant."""
        now = self._clock.now_utc()
        async with self._uow_factory() as uow:
            grants = await uow.grants.list_by_tenant(tenant_id)
        return [g for g in grants if g.is_valid_at(now)]

    async def get_grant(self, grant_id: UUID) -> Grant:
        async with self._uow_factory() as uow:
            grant = await uow.grants.get_by_id(grant_id)
        if grant is None:
            raise NotFound("Grant", str(grant_id))
        return grant

    async def create_grant(
        self,
        subject_id: str,
        tenant_id: str,
        role_name: str,
        permissions: tuple[str, ...],
        *,
        granted_by: str,
        reason: str = "",
        expires_at: datetime | None = None,
        set_name: str | None = None,
        set_description: str = "",
    ) -> Grant:
        """Create a permission set and a grant of it, then audit the grant."""
        async with self._uow_factory() as uow:
            grant = await self.issue_grant(
                uow,
                subject_id,
                tenant_id,
                role_name,
                permissions,
                granted_by=granted_by,
                reason=reason,
                expires_at=expires_at,
                set_name=set_name,
                set_description=set_description,
            )
        await self.audit_granted(grant, source=AuditSource.LEDGER)
        return grant

    async def issue_grant(
        self,
        uow: UnitOfWork,
        subject_id: str,
        tenant_id: str,
        role_name: str,
        permissions: tuple[str, ...],
        *,
        granted_by: str,
        reason: str = "",
        expires_at: datetime | None = None,
        set_name: str | None = None,
        set_description: str = "",
    ) -> Grant:
        """Insert set and grant inside the caller's unit of work. Not audited."""
        if not permissions:
            raise ValidationError("A grant must carry at least one permission")
        now = self._clock.now_utc()
        permission_set = PermissionSet(
            id=uuid4(),
            tenant_id=tenant_id,
            name=set_name or role_name,
            description=set_description,
            permissions=tuple(permissions),
            created_at=now,
        )
        await uow.permission_sets.create(permission_set)
        grant = Grant(
            id=uuid4(),
            subject_id=subject_id,
            tenant_id=tenant_id,
            role_name=role_name,
            permission_set_id=permission_set.id,
            permissions=permission_set.permissions,
            created_at=now,
            granted_by=granted_by,
            reason=reason,
            expires_at=expires_at,
        )
        await uow.grants.create(grant)
        logger.info(
            "Granted %s to %s in %s (expires %s)",
            role_name,
            subject_id,
            tenant_id,
            expires_at.isoformat() if expires_at else "never",
        )
        return grant

    async def grant_temporary_permission(
        self,
        subject_id: str,
        tenant_id: str,
        permission: str,
        expires_at: datetime,
        reason: str,
        granted_by: str = "system",
    ) -> Grant:
        """Grant a single permission until `expires_at`."""
        if not self._catalog.has_permission(permission):
            raise ValidationError(f"Unknown permission: {permission}")
        if expires_at <= self._clock.now_utc():
            raise ValidationError("expires_at must be in the future")
        return await self.create_grant(
            subject_id,
            tenant_id,
            TEMPORARY_ROLE,
            (permission,),
            granted_by=granted_by,
            reason=reason,
            expires_at=expires_at,
            set_name=temporary_set_name(permission),
            set_description=f"Temporary access granted: {reason}",
        )

    async def assign_role(
        self,
        subject_id: str,
        tenant_id: str,
        role_key: str,
        *,
        granted_by: str,
        reason: str = "",
        expires_at: datetime | None = None,
    ) -> Grant:
        """Grant the permissions of a catalog role."""
        role = self._catalog.require_role(role_key, tenant_id)
        if expires_at is not None and expires_at <= self._clock.now_utc():
            raise ValidationError("expires_at must be in the future")
        return await self.create_grant(
            subject_id,
            tenant_id,
            role.key,
            role.permissions,
            granted_by=granted_by,
            reason=reason,
            expires_at=expires_at,
            set_name=role.name,
            set_description=role.description,
        )

    async def deactivate(
        self,
        grant_id: UUID,
        *,
        actor: str = "system",
        reason: str = "",
        source: AuditSource = AuditSource.LEDGER,
    ) -> Grant:
        """Clear the active flag. Already inactive grants are returned unchanged."""
        now = self._clock.now_utc()
        async with self._uow_factory() as uow:
            grant = await uow.grants.get_by_id(grant_id)
            if grant is None:
                raise NotFound("Grant", str(grant_id))
            if not grant.is_active:
                return grant
            changed = await uow.grants.deactivate(grant_id, now)
            if changed:
                grant.is_active = False
                grant.deactivated_at = now
            else:
                grant = await uow.grants.get_by_id(grant_id)
        if changed:
            logger.info("Deactivated grant %s of %s", grant_id, grant.subject_id)
            await self._audit_log.log_event(
                subject_id=grant.subject_id,
                tenant_id=grant.tenant_id,
                permission=grant_label(grant),
                action=AuditAction.PERMISSION_REVOKED,
                granted=True,
                reason=reason or f"Grant {grant_id} deactivated by {actor}",
                source=source,
                resource_type="grant",
                resource_id=str(grant_id),
            )
        return grant

    async def audit_granted(self, grant: Grant, *, source: AuditSource) -> None:
        await self._audit_log.log_event(
            subject_id=grant.subject_id,
            tenant_id=grant.tenant_id,
            permission=grant_label(grant),
            action=AuditAction.PERMISSION_GRANTED,
            granted=True,
            reason=grant.reason or f"Granted by {grant.granted_by}",
            source=source,
            resource_type="grant",
            resource_id=str(grant.id),
        )


def temporary_set_name(permission: str) -> str:
    return f"Temporary Access - {permission}"


def grant_label(grant: Grant) -> str:
    """The permission of a temporary grant, else the role name."""
    if grant.role_name == TEMPORARY_ROLE and len(grant.permissions) == 1:
        return grant.permissions[0]
    return grant.role_name
