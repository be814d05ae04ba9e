"""Health check endpoints."""

import falcon.asgi

from agrigov.application.services.audit_log import AuditLog


class HealthResource:
    """Liveness, and readiness including the audit writer state."""

    def __init__(self, audit_log: AuditLog | None = None) -> None:
        self._audit_log = audit_log

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness.

        A background audit log whose writer is not running is not ready.
        """
        if self._audit_log is not None and self._audit_log.background and not self._audit_log.running:
            resp.media = {"status": "degraded", "audit_writer": "stopped"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
