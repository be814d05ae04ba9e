"""Catalog API resources."""

import falcon.asgi

from agrigov.domain.catalog import PermissionCatalog
from agrigov.interfaces.api.serializers import permission_to_dict, role_to_dict


class PermissionCatalogResource:
    """GET /v1/permissions - list catalog permissions."""

    def __init__(self, catalog: PermissionCatalog) -> None:
        self._catalog = catalog

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        category = req.get_param("category")
        items = [
            permission_to_dict(p)
            for p in self._catalog.permissions()
            if category is None or p.key_category == category
        ]
        resp.media = {"items": items}
        resp.status = falcon.HTTP_200


class RoleCatalogResource:
    """GET /v1/roles - list system roles (plus a tenant's custom roles)."""

    def __init__(self, catalog: PermissionCatalog) -> None:
        self._catalog = catalog

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        roles = self._catalog.roles(req.get_param("tenant_id"))
        resp.media = {"items": [role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200
