"""Reviewer notifiers."""

import logging

import httpx

from agrigov.domain.entities import AccessRequest

logger = logging.getLogger("agrigov.notification")


class LoggingReviewerNotifier:
    """Only logs that reviewers would be notified."""

    async def notify(self, request: AccessRequest) -> None:
        logger.info("Would notify approvers for access request %s", request.id)


class WebhookReviewerNotifier:
    """POSTs the pending request to a webhook that fans out to reviewers."""

    def __init__(self, url: str, timeout: float = 5.0, client: httpx.AsyncClient | None = None) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client

    async def notify(self, request: AccessRequest) -> None:
        payload = {
            "event": "access_request.pending",
            "request_id": str(request.id),
            "tenant_id": request.tenant_id,
            "subject_id": request.subject_id,
            "permission": request.requested_permission,
            "resource_type": request.resource_type,
            "resource_id": request.resource_id,
            "justification": request.justification,
            "review_deadline": request.review_deadline.isoformat(),
        }
        if self._client is not None:
            response = await self._client.post(self._url, json=payload, timeout=self._timeout)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=payload)
        response.raise_for_status()
        logger.info("Notified approvers for access request %s", request.id)


def create_reviewer_notifier(url: str, timeout: float = 5.0):
    """Webhook notifier when a URL is configured, else log-only."""
    if url:
        return WebhookReviewerNotifier(url, timeout)
    return LoggingReviewerNotifier()
