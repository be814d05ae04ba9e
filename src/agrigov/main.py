"""Application entry point and composition root."""

import asyncio
import logging

import typer

from agrigov import __version__
from agrigov.application.policy import AccessPolicy
from agrigov.application.ports import Clock, ReviewerNotifier
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
from agrigov.config import Settings, get_settings
from agrigov.domain.catalog import PermissionCatalog, build_system_catalog
from agrigov.infrastructure.auth.keycloak_provider import KeycloakProvider
from agrigov.infrastructure.clock import SystemClock
from agrigov.infrastructure.notification.webhook_notifier import create_reviewer_notifier
from agrigov.infrastructure.persistence.postgres.connection import create_pool
from agrigov.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from agrigov.interfaces.api.app import Services, create_app
from agrigov.interfaces.api.middleware.auth import AuthMiddleware
from agrigov.interfaces.api.middleware.cors import CORSMiddleware
from agrigov.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from agrigov.logging_config import configure_logging

logger = logging.getLogger("agrigov")

cli = typer.Typer(
    name="agrigov",
    help="Access governance for the farm-management platform",
    add_completion=False,
)


def build_services(
    uow_factory,
    settings: Settings,
    *,
    catalog: PermissionCatalog | None = None,
    clock: Clock | None = None,
    notifier: ReviewerNotifier | None = None,
    audit_background: bool | None = None,
) -> Services:
    """Wire services and use cases over a unit-of-work factory."""
    catalog = catalog or build_system_catalog()
    clock = clock or SystemClock()
    policy = AccessPolicy.from_settings(settings)
    if notifier is None:
        notifier = create_reviewer_notifier(
            settings.notification_webhook_url, settings.notification_timeout_seconds
        )

    audit_log = AuditLog(
        uow_factory,
        clock,
        background=settings.audit_background if audit_background is None else audit_background,
        queue_size=settings.audit_queue_size,
    )
    grant_ledger = GrantLedger(uow_factory, catalog, audit_log, clock)
    resolver = PermissionResolver(catalog, grant_ledger, audit_log)
    detect_drift = DetectPermissionDriftUseCase(uow_factory, catalog, clock, policy)

    return Services(
        catalog=catalog,
        clock=clock,
        audit_log=audit_log,
        grant_ledger=grant_ledger,
        resolver=resolver,
        request_access=RequestAccessUseCase(
            unit_of_work_factory=uow_factory,
            catalog=catalog,
            audit_log=audit_log,
            clock=clock,
            policy=policy,
            notifier=notifier,
        ),
        list_access_requests=ListAccessRequestsUseCase(uow_factory),
        review_access_request=ReviewAccessRequestUseCase(
            unit_of_work_factory=uow_factory,
            permission_checker=resolver,
            grant_ledger=grant_ledger,
            audit_log=audit_log,
            clock=clock,
            policy=policy,
        ),
        expire_access_requests=ExpireAccessRequestsUseCase(uow_factory, audit_log, clock),
        assign_role=AssignRoleUseCase(resolver, grant_ledger),
        grant_temporary_permission=GrantTemporaryPermissionUseCase(resolver, grant_ledger),
        revoke_grant=RevokeGrantUseCase(resolver, grant_ledger),
        detect_drift=detect_drift,
        remediate_drift=RemediatePermissionDriftUseCase(resolver, detect_drift, grant_ledger),
        get_analytics=GetAccessAnalyticsUseCase(
            uow_factory,
            audit_log,
            clock,
            default_window_days=settings.analytics_window_days,
        ),
    )


async def load_catalog(uow_factory) -> PermissionCatalog:
    """System catalog plus the tenant custom roles stored in the database.

    A custom role that references an unknown permission is skipped with a warning.
    """
    async with uow_factory() as uow:
        roles = await uow.roles.list_custom()
    catalog = build_system_catalog()
    loaded = 0
    for role in roles:
        try:
            catalog = catalog.with_roles([role])
        except ValueError as e:
            logger.warning("Skipping custom role %s/%s: %s", role.tenant_id, role.key, e)
            continue
        loaded += 1
    logger.info("Loaded %d custom roles", loaded)
    return catalog


async def fetch_catalog(settings: Settings) -> PermissionCatalog:
    """Load the catalog over a short-lived pool, before the server loop starts."""
    pool = create_pool(settings.database_url, 1, 2)
    await pool.open()
    try:
        return await load_catalog(create_uow_factory(pool))
    finally:
        await pool.close()


def create_agrigov_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)
    pool = create_pool(settings.database_url, settings.db_pool_min_size, settings.db_pool_max_size)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )

    services = build_services(uow_factory, settings, catalog=asyncio.run(fetch_catalog(settings)))
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        services,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, services.audit_log),
            AuthMiddleware(keycloak),
        ],
    )


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_agrigov_app()
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)


async def run_sweep(limit: int) -> int:
    """Expire overdue access requests once, with inline audit writes."""
    settings = get_settings()
    pool = create_pool(settings.database_url, 1, 2)
    await pool.open()
    try:
        uow_factory = create_uow_factory(pool)
        services = build_services(
            uow_factory,
            settings,
            catalog=await load_catalog(uow_factory),
            audit_background=False,
        )
        return await services.expire_access_requests.execute(limit)
    finally:
        await pool.close()


@cli.command()
def version() -> None:
    """Print the version."""
    typer.echo(f"agrigov v{__version__}")


@cli.command()
def serve(
    host: str = typer.Option("", help="Bind address (default from settings)"),
    port: int = typer.Option(0, help="Bind port (default from settings)"),
) -> None:
    """Serve the HTTP API."""
    run_server(host or None, port or None)


@cli.command()
def sweep(
    limit: int = typer.Option(500, min=1, help="Maximum requests to expire in this run"),
) -> None:
    """Expire pending access requests whose review deadline has passed."""
    configure_logging(get_settings().log_level)
    expired = asyncio.run(run_sweep(limit))
    typer.echo(f"Expired {expired} access requests")


def main() -> None:
    """CLI entry point."""
    cli()
