"""Initial schema - catalog, permission sets, grants, access requests, audit.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from agrigov.domain.catalog.definitions import SYSTEM_PERMISSIONS, SYSTEM_ROLES

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    permissions = op.create_table(
        "permissions",
        sa.Column("key", sa.String(100), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("resource_type", sa.String(100), nullable=False),
        sa.Column("actions", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("conditions", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    roles = op.create_table(
        "roles",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("key", sa.String(100), nullable=False),
        sa.Column("tenant_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("permissions", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("can_delegate", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("max_users", sa.Integer(), nullable=True),
    )
    op.create_index(
        "ix_roles_tenant_key",
        "roles",
        [sa.text("coalesce(tenant_id, '')"), "key"],
        unique=True,
    )

    op.create_table(
        "permission_sets",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("tenant_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("permissions", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "grants",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("subject_id", sa.String(255), nullable=False),
        sa.Column("tenant_id", sa.String(255), nullable=False),
        sa.Column("role_name", sa.String(100), nullable=False),
        sa.Column(
            "permission_set_id",
            sa.UUID(),
            sa.ForeignKey("permission_sets.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("granted_by", sa.String(255), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False, server_default=""),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deactivated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_grants_subject_tenant", "grants", ["subject_id", "tenant_id"])
    op.create_index("ix_grants_tenant_active", "grants", ["tenant_id", "is_active"])

    op.create_table(
        "access_requests",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("subject_id", sa.String(255), nullable=False),
        sa.Column("tenant_id", sa.String(255), nullable=False),
        sa.Column("requested_permission", sa.String(100), nullable=False),
        sa.Column("resource_type", sa.String(100), nullable=False),
        sa.Column("resource_id", sa.String(255), nullable=True),
        sa.Column("justification", sa.Text(), nullable=False),
        sa.Column("emergency", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("review_deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", sa.String(255), nullable=True),
        sa.Column("review_notes", sa.Text(), nullable=True),
        sa.Column("grant_id", sa.UUID(), sa.ForeignKey("grants.id"), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'denied', 'expired')",
            name="ck_access_requests_status",
        ),
    )
    op.create_index("ix_access_requests_tenant_requested", "access_requests", ["tenant_id", "requested_at"])
    op.create_index(
        "ix_access_requests_pending_deadline",
        "access_requests",
        ["review_deadline"],
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "access_audit",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("subject_id", sa.String(255), nullable=False),
        sa.Column("tenant_id", sa.String(255), nullable=False),
        sa.Column("permission", sa.String(255), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("outcome", sa.String(20), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("source", sa.String(50), nullable=False),
        sa.Column("resource_type", sa.String(100), nullable=False),
        sa.Column("resource_id", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_access_audit_tenant_created", "access_audit", ["tenant_id", "created_at"])
    op.create_index("ix_access_audit_subject", "access_audit", ["subject_id"])

    op.create_table(
        "subject_profiles",
        sa.Column("subject_id", sa.String(255), primary_key=True),
        sa.Column("tenant_id", sa.String(255), primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("nominal_role", sa.String(100), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )

    # Seed the system catalog
    op.bulk_insert(
        permissions,
        [
            {
                "key": p.key,
                "name": p.name,
                "description": p.description,
                "category": p.category,
                "resource_type": p.resource_type,
                "actions": list(p.actions),
                "conditions": [
                    {"field": c.field, "operator": str(c.operator), "value": c.value}
                    for c in p.conditions
                ],
                "is_system": p.is_system,
            }
            for p in SYSTEM_PERMISSIONS
        ],
    )
    op.bulk_insert(
        roles,
        [
            {
                "key": r.key,
                "tenant_id": None,
                "name": r.name,
                "description": r.description,
                "permissions": list(r.permissions),
                "is_system": True,
                "can_delegate": r.can_delegate,
                "max_users": r.max_users,
            }
            for r in SYSTEM_ROLES
        ],
    )


def downgrade() -> None:
    op.drop_table("subject_profiles")
    op.drop_table("access_audit")
    op.drop_table("access_requests")
    op.drop_table("grants")
    op.drop_table("permission_sets")
    op.drop_table("roles")
    op.drop_table("permissions")
