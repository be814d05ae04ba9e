"""Domain exceptions."""


class AgriGovError(Exception):
    """Base exception for agrigov."""

    pass


class NotFound(AgriGovError):
    """Requested role, request, grant or drift was not found."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class Forbidden(AgriGovError):
    """Actor does not hold the permission the operation requires."""

    pass


class InvalidState(AgriGovError):
    """Operation is not allowed in the current state (e.g. double review)."""

    pass


class ValidationError(AgriGovError):
    """Validation failed for input data."""

    pass


class SystemFailure(AgriGovError):
    """Storage or transport failure."""

    pass


class OperationCancelled(AgriGovError):
    """Caller cancelled a long-running operation before it completed."""

    pass
