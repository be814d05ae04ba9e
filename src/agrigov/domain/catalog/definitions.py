"""System permissions and roles of the farm-management platform."""

from agrigov.domain.entities import Permission, Role


def _perm(
    key: str,
    name: str,
    description: str,
    category: str,
    resource_type: str,
    actions: tuple[str, ...],
) -> Permission:
    return Permission(
        key=key,
        name=name,
        description=description,
        category=category,
        resource_type=resource_type,
        actions=actions,
    )


SYSTEM_PERMISSIONS: tuple[Permission, ...] = (
    # Farm Management
    _perm("farms.create", "Create Farms", "Create new farm records", "Farm Management", "farm", ("create",)),
    _perm("farms.read", "View Farms", "View farm information and details", "Farm Management", "farm", ("read",)),
    _perm("farms.update", "Edit Farms", "Modify farm information", "Farm Management", "farm", ("update",)),
    _perm("farms.delete", "Delete Farms", "Remove farm records (dangerous)", "Farm Management", "farm", ("delete",)),
    # Crop Management
    _perm("crops.create", "Create Crops", "Add new crop records", "Crop Management", "crop", ("create",)),
    _perm("crops.read", "View Crops", "View crop information and yield data", "Crop Management", "crop", ("read",)),
    _perm("crops.update", "Edit Crops", "Modify crop information and yield data", "Crop Management", "crop", ("update",)),
    _perm("crops.delete", "Delete Crops", "Remove crop records", "Crop Management", "crop", ("delete",)),
    # Livestock Management
    _perm("livestock.create", "Add Livestock", "Register new animals", "Livestock Management", "livestock", ("create",)),
    _perm("livestock.read", "View Livestock", "View animal records and health data", "Livestock Management", "livestock", ("read",)),
    _perm("livestock.update", "Edit Livestock", "Modify animal records and health data", "Livestock Management", "livestock", ("update",)),
    _perm("livestock.delete", "Remove Livestock", "Delete animal records", "Livestock Management", "livestock", ("delete",)),
    # Financial Management
    _perm("financial.read", "View Financial Records", "View financial transactions and reports", "Financial Management", "financial_record", ("read",)),
    _perm("financial.create", "Create Financial Records", "Add new financial transactions", "Financial Management", "financial_record", ("create",)),
    _perm("financial.update", "Edit Financial Records", "Modify financial transactions", "Financial Management", "financial_record", ("update",)),
    _perm("financial.delete", "Delete Financial Records", "Remove financial transactions (requires approval)", "Financial Management", "financial_record", ("delete",)),
    _perm("financial.reconcile", "Reconcile Accounts", "Perform account reconciliation", "Financial Management", "financial_record", ("reconcile",)),
    # User Management
    _perm("users.read", "View Users", "View user profiles and information", "User Management", "user", ("read",)),
    _perm("users.invite", "Invite Users", "Send invitations to new users", "User Management", "user", ("invite",)),
    _perm("users.update", "Edit Users", "Modify user profiles and settings", "User Management", "user", ("update",)),
    _perm("users.deactivate", "Deactivate Users", "Disable user accounts", "User Management", "user", ("deactivate",)),
    # Permission Management
    _perm("permissions.read", "View Permissions", "View permission assignments", "Permission Management", "permission", ("read",)),
    _perm("permissions.assign", "Assign Permissions", "Grant permissions to users", "Permission Management", "permission", ("assign",)),
    _perm("permissions.revoke", "Revoke Permissions", "Remove permissions from users", "Permission Management", "permission", ("revoke",)),
    _perm("permissions.delegate", "Delegate Permissions", "Allow users to grant their permissions to others", "Permission Management", "permission", ("delegate",)),
    # System Administration
    _perm("system.admin", "System Administration", "Full system administration access", "System Administration", "system", ("*",)),
    _perm("system.backup", "System Backup", "Create and manage system backups", "System Administration", "system", ("backup", "restore")),
    _perm("system.audit", "Audit Access", "View system audit logs and security events", "System Administration", "audit", ("read",)),
    # Emergency Access
    _perm("emergency.access", "Emergency Access", "Break-glass access for emergency situations", "Emergency", "*", ("*",)),
)


SYSTEM_ROLES: tuple[Role, ...] = (
    Role(
        key="owner",
        name="Farm Owner",
        description="Full access to all farm operations and management",
        permissions=tuple(p.key for p in SYSTEM_PERMISSIONS),
        can_delegate=True,
    ),
    Role(
        key="manager",
        name="Farm Manager",
        description="Manage daily farm operations and staff",
        permissions=(
            "farms.read", "farms.update",
            "crops.create", "crops.read", "crops.update", "crops.delete",
            "livestock.create", "livestock.read", "livestock.update", "livestock.delete",
            "financial.read", "financial.create", "financial.update",
            "users.read", "users.invite",
        ),
    ),
    Role(
        key="worker",
        name="Farm Worker",
        description="Daily operational tasks and data entry",
        permissions=(
            "farms.read",
            "crops.read", "crops.update",
            "livestock.read", "livestock.update",
            "financial.read",
        ),
    ),
    Role(
        key="viewer",
        name="Read-Only Access",
        description="View-only access to farm data",
        permissions=("farms.read", "crops.read", "livestock.read", "financial.read"),
    ),
    Role(
        key="accountant",
        name="Financial Manager",
        description="Financial management and reporting",
        permissions=(
            "farms.read",
            "financial.read", "financial.create", "financial.update", "financial.reconcile",
        ),
    ),
    Role(
        key="veterinarian",
        name="Veterinarian",
        description="Animal health management and records",
        permissions=("farms.read", "livestock.read", "livestock.update"),
    ),
)

# Typical permission count per nominal role, baseline for excessive-privilege drift.
EXPECTED_PERMISSION_COUNTS: dict[str, int] = {
    "owner": 25,
    "manager": 15,
    "worker": 8,
    "viewer": 4,
    "accountant": 6,
    "veterinarian": 4,
}
DEFAULT_EXPECTED_PERMISSION_COUNT = 8
