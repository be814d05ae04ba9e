"""Falcon ASGI application - routes and error mapping."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import falcon
import falcon.asgi

from agrigov.application.ports import Clock
from agrigov.application.services.audit_log import AuditLog
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.application.services.permission_resolver import PermissionResolver
from agrigov.application.use_cases.access_request.expire_access_requests import (
    ExpireAccessRequestsUseCase,
)
from agrigov.application.use_cases.access_request.list_access_requests import (
    ListAccessRequestsUseCase,
)
from agrigov.application.use_cases.access_request.request_access import RequestAccessUseCase
from agrigov.application.use_cases.access_request.review_access_request import (
    ReviewAccessRequestUseCase,
)
from agrigov.application.use_cases.analytics.get_access_analytics import (
    GetAccessAnalyticsUseCase,
)
from agrigov.application.use_cases.drift.detect_permission_drift import (
    DetectPermissionDriftUseCase,
)
from agrigov.application.use_cases.drift.remediate_permission_drift import (
    RemediatePermissionDriftUseCase,
)
from agrigov.application.use_cases.grant.assign_role import AssignRoleUseCase
from agrigov.application.use_cases.grant.grant_temporary_permission import (
    GrantTemporaryPermissionUseCase,
)
from agrigov.application.use_cases.grant.revoke_grant import RevokeGrantUseCase
from agrigov.domain.catalog import PermissionCatalog
from agrigov.domain.exceptions import (
    AgriGovError,
    Forbidden,
    InvalidState,
    NotFound,
    OperationCancelled,
    SystemFailure,
    ValidationError,
)
from agrigov.interfaces.api.resources.access_requests import (
    AccessRequestReviewResource,
    AccessRequestsResource,
)
from agrigov.interfaces.api.resources.analytics import AnalyticsResource
from agrigov.interfaces.api.resources.audit import AuditResource
from agrigov.interfaces.api.resources.catalog import (
    PermissionCatalogResource,
    RoleCatalogResource,
)
from agrigov.interfaces.api.resources.drift import DriftRemediationResource, DriftResource
from agrigov.interfaces.api.resources.grants import (
    GrantResource,
    GrantsResource,
    TemporaryGrantsResource,
)
from agrigov.interfaces.api.resources.health import HealthResource
from agrigov.interfaces.api.resources.permission_checks import PermissionChecksResource

logger = logging.getLogger("agrigov.api")

_ERROR_STATUS: tuple[tuple[type[AgriGovError], str], ...] = (
    (NotFound, falcon.HTTP_404),
    (Forbidden, falcon.HTTP_403),
    (InvalidState, falcon.HTTP_409),
    (ValidationError, falcon.HTTP_400),
    (SystemFailure, falcon.HTTP_503),
    (OperationCancelled, falcon.HTTP_503),
)


@dataclass
class Services:
    """Everything the API resources need, wired by the composition root."""

    catalog: PermissionCatalog
    clock: Clock
    audit_log: AuditLog
    grant_ledger: GrantLedger
    resolver: PermissionResolver
    request_access: RequestAccessUseCase
    list_access_requests: ListAccessRequestsUseCase
    review_access_request: ReviewAccessRequestUseCase
    expire_access_requests: ExpireAccessRequestsUseCase
    assign_role: AssignRoleUseCase
    grant_temporary_permission: GrantTemporaryPermissionUseCase
    revoke_grant: RevokeGrantUseCase
    detect_drift: DetectPermissionDriftUseCase
    remediate_drift: RemediatePermissionDriftUseCase
    get_analytics: GetAccessAnalyticsUseCase


def error_status(ex: AgriGovError) -> str:
    for exc_type, status in _ERROR_STATUS:
        if isinstance(ex, exc_type):
            return status
    return falcon.HTTP_500


async def handle_domain_error(req, resp, ex: AgriGovError, params) -> None:
    resp.status = error_status(ex)
    if resp.status == falcon.HTTP_503:
        logger.warning("%s %s failed: %s", req.method, req.path, ex)
    resp.media = {"error": str(ex)}


async def handle_unexpected_error(req, resp, ex: Exception, params) -> None:
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(services: Services, middleware: Sequence[object] = ()) -> falcon.asgi.App:
    """Build the Falcon app and register every route."""
    s = services
    app = falcon.asgi.App(middleware=list(middleware))
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(AgriGovError, handle_domain_error)

    health = HealthResource(s.audit_log)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/permissions", PermissionCatalogResource(s.catalog))
    app.add_route("/v1/roles", RoleCatalogResource(s.catalog))

    tenant = "/v1/tenants/{tenant_id}"
    app.add_route(f"{tenant}/permission-checks", PermissionChecksResource(s.resolver))
    app.add_route(
        f"{tenant}/access-requests",
        AccessRequestsResource(s.resolver, s.request_access, s.list_access_requests),
    )
    app.add_route(
        f"{tenant}/access-requests/{{request_id}}/review",
        AccessRequestReviewResource(s.review_access_request),
    )
    app.add_route(f"{tenant}/grants", GrantsResource(s.resolver, s.grant_ledger, s.assign_role))
    app.add_route(f"{tenant}/grants/temporary", TemporaryGrantsResource(s.grant_temporary_permission))
    app.add_route(f"{tenant}/grants/{{grant_id}}", GrantResource(s.revoke_grant))
    app.add_route(f"{tenant}/drift", DriftResource(s.resolver, s.detect_drift))
    app.add_route(f"{tenant}/drift/{{drift_id}}/remediate", DriftRemediationResource(s.remediate_drift))
    app.add_route(f"{tenant}/analytics", AnalyticsResource(s.resolver, s.get_analytics))
    app.add_route(f"{tenant}/audit", AuditResource(s.resolver, s.audit_log, s.clock))
    return app
