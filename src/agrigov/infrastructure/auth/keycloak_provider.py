"""Keycloak token introspection - maps a bearer token to the acting subject."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger("agrigov.auth")


@dataclass
class OIDCUser:
    """Subject behind an active token. Privileges come from the grant ledger, not the IdP."""

    user_id: str
    email: str | None
    username: str | None


class KeycloakProvider:
    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """None for inactive tokens, tokens without a subject, and introspection errors."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        subject = token_info.get("sub")
        if not token_info.get("active") or not subject:
            return None
        return OIDCUser(
            user_id=subject,
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )
