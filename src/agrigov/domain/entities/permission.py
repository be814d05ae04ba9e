"""Permission definition - catalog entry naming an action on a resource type."""

from dataclasses import dataclass

from agrigov.domain.value_objects import Condition
from agrigov.domain.value_objects.permission_key import category_of


@dataclass(frozen=True)
class Permission:
    """Catalog permission, e.g. `farms.delete`. Immutable once loaded."""

    key: str
    name: str
    description: str
    category: str
    resource_type: str
    actions: tuple[str, ...]
    conditions: tuple[Condition, ...] = ()
    is_system: bool = True

    def __post_init__(self) -> None:
        prefix, _, action = self.key.partition(".")
        if not prefix or not action:
            raise ValueError(f"Permission key must be 'category.action': {self.key!r}")

    @property
    def key_category(self) -> str:
        """Key prefix used for `category.*` wildcards (e.g. `farms`)."""
        return category_of(self.key)
