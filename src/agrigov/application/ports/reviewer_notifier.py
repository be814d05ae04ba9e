"""Reviewer notifier port - tells approvers a request awaits review."""

from typing import Protocol

from agrigov.domain.entities import AccessRequest


class ReviewerNotifier(Protocol):
    """Port for notifying reviewers. Delivery is best-effort."""

    async def notify(self, request: AccessRequest) -> None: ...
