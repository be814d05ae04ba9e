"""Unit tests for API middleware."""

from unittest.mock import MagicMock

import falcon
import pytest
from falcon import testing
from keycloak.exceptions import KeycloakError

from agrigov.infrastructure.auth.keycloak_provider import KeycloakProvider, OIDCUser
from agrigov.interfaces.api.middleware.auth import ANONYMOUS, AuthMiddleware, RequestUser
from agrigov.interfaces.api.middleware.cors import CORSMiddleware


def _keycloak(user: OIDCUser | None) -> MagicMock:
    keycloak = MagicMock()
    keycloak.decode_token.return_value = user
    return keycloak


class TestAuthMiddleware:
    @pytest.mark.asyncio
    async def test_no_token_is_anonymous(self) -> None:
        req = testing.create_asgi_req()
        await AuthMiddleware(_keycloak(None)).process_request(req, MagicMock())
        assert req.context.user == RequestUser(user_id=ANONYMOUS)

    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        keycloak = _keycloak(OIDCUser("u-42", "ada@farm.example", "ada"))
        req = testing.create_asgi_req(headers={"Authorization": "Bearer abc"})

        await AuthMiddleware(keycloak).process_request(req, MagicMock())

        keycloak.decode_token.assert_called_once_with("abc")
        assert req.context.user == RequestUser("u-42", "ada@farm.example", "ada")

    @pytest.mark.asyncio
    async def test_inactive_token(self) -> None:
        req = testing.create_asgi_req(headers={"Authorization": "Bearer stale"})
        await AuthMiddleware(_keycloak(None)).process_request(req, MagicMock())
        assert req.context.user is None

    @pytest.mark.asyncio
    async def test_token_without_provider(self) -> None:
        req = testing.create_asgi_req(headers={"Authorization": "Bearer abc"})
        await AuthMiddleware().process_request(req, MagicMock())
        assert req.context.user is None


class TestCORSMiddleware:
    @pytest.mark.asyncio
    async def test_wildcard_echoes_origin(self) -> None:
        req = testing.create_asgi_req(headers={"Origin": "https://farm.example"})
        resp = MagicMock()
        await CORSMiddleware(["*"]).process_request(req, resp)
        resp.set_header.assert_any_call("Access-Control-Allow-Origin", "https://farm.example")

    @pytest.mark.asyncio
    async def test_listed_origin(self) -> None:
        req = testing.create_asgi_req(headers={"Origin": "https://b.example"})
        resp = MagicMock()
        await CORSMiddleware(["https://a.example", "https://b.example"]).process_request(req, resp)
        resp.set_header.assert_any_call("Access-Control-Allow-Origin", "https://b.example")

    @pytest.mark.asyncio
    async def test_preflight_completes(self) -> None:
        req = testing.create_asgi_req(method="OPTIONS")
        resp = MagicMock()
        await CORSMiddleware(["*"]).process_request(req, resp)
        assert resp.complete is True
        assert resp.status == falcon.HTTP_204

    @pytest.mark.asyncio
    async def test_unlisted_origin_gets_no_allow_origin(self) -> None:
        req = testing.create_asgi_req(headers={"Origin": "https://evil.example"})
        resp = MagicMock()
        await CORSMiddleware(["https://a.example"]).process_request(req, resp)
        set_names = [c.args[0] for c in resp.set_header.call_args_list]
        assert "Access-Control-Allow-Origin" not in set_names
        assert "Access-Control-Allow-Methods" in set_names


class TestKeycloakProvider:
    def _provider(self, introspection) -> KeycloakProvider:
        provider = KeycloakProvider("https://sso.example", "farms", "agrigov")
        provider._keycloak = MagicMock()
        if isinstance(introspection, Exception):
            provider._keycloak.introspect.side_effect = introspection
        else:
            provider._keycloak.introspect.return_value = introspection
        return provider

    def test_active_token(self) -> None:
        provider = self._provider(
            {"active": True, "sub": "u-42", "email": "ada@farm.example", "preferred_username": "ada"}
        )
        assert provider.decode_token("abc") == OIDCUser("u-42", "ada@farm.example", "ada")

    def test_inactive_token(self) -> None:
        assert self._provider({"active": False, "sub": "u-42"}).decode_token("abc") is None

    def test_token_without_subject(self) -> None:
        assert self._provider({"active": True}).decode_token("abc") is None

    def test_introspection_error(self) -> None:
        provider = self._provider(KeycloakError("boom"))
        assert provider.decode_token("abc") is None
