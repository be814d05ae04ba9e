"""Access request lifecycle status."""

from enum import StrEnum


class AccessRequestStatus(StrEnum):
    """pending -> approved | denied | expired; all but pending are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not AccessRequestStatus.PENDING
