"""Permission key helpers - `category.action` identifiers and wildcards."""

WILDCARD = "*"
ADMIN_PERMISSION = "system.admin"
REVIEW_PERMISSION = "permissions.assign"
REVOKE_PERMISSION = "permissions.revoke"
DELEGATE_PERMISSION = "permissions.delegate"
READ_PERMISSIONS_PERMISSION = "permissions.read"
AUDIT_PERMISSION = "system.audit"

TEMPORARY_ROLE = "temporary_access"


def category_of(permission: str) -> str:
    """Return the category part of a key (substring before the first dot)."""
    return permission.split(".", 1)[0]


def category_wildcard(category: str) -> str:
    """Return the `category.*` wildcard for a category."""
    return f"{category}.{WILDCARD}"


def is_wildcard(permission: str) -> bool:
    return permission == WILDCARD or permission.endswith(f".{WILDCARD}")
