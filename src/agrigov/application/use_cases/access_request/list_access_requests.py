"""List access requests use case."""

from agrigov.domain.entities import AccessRequest
from agrigov.domain.value_objects import AccessRequestStatus


class ListAccessRequestsUseCase:
    """List a tenant's requests, newest first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        tenant_id: str,
        status: AccessRequestStatus | None = None,
        limit: int = 100,
    ) -> list[AccessRequest]:
        async with self._uow_factory() as uow:
            return await uow.access_requests.list_by_tenant(
                tenant_id, status=status, limit=limit
            )
