"""Role repository port."""

from typing import Protocol

from agrigov.domain.entities import Role


class RoleRepository(Protocol):
    """Port for tenant-defined roles (system roles live in the catalog)."""

    async def list_custom(self) -> list[Role]: ...
