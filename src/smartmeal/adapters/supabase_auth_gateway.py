"""Supabase Auth implementation of the auth gateway."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from smartmeal.domain.auth import AuthSession, AuthUser
from smartmeal.errors import AuthenticationError
from smartmeal.services.auth import AuthGateway

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """E-mail/password auth through Supabase Auth."""

    client: Client

    def sign_up(self, email: str, password: str, display_name: str) -> AuthSession:
        """Register a new identity with its display name as metadata."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"display_name": display_name}},
                }
            )
        except Exception as exc:
            _logger.warning("Sign-up rejected for %s: %s", email, exc)
            raise AuthenticationError(f"Registration failed: {exc}") from exc
        return _to_session(response)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with e-mail and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            _logger.warning("Sign-in rejected for %s: %s", email, exc)
            raise AuthenticationError("Invalid credentials") from exc
        return _to_session(response)

    def get_user(self, access_token: str) -> AuthUser:
        """Resolve an access token to its user."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as exc:
            raise AuthenticationError("Invalid or expired token") from exc
        if response is None or response.user is None:
            raise AuthenticationError("Invalid or expired token")
        return _to_user(response.user)


def _to_session(response: object) -> AuthSession:
    user = getattr(response, "user", None)
    session = getattr(response, "session", None)
    if user is None:
        raise AuthenticationError("Auth service returned no user")
    # Sessions are withheld until the e-mail is confirmed.
    return AuthSession(
        user=_to_user(user),
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
    )


def _to_user(user: object) -> AuthUser:
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthUser(
        id=UUID(str(user.id)),
        email=str(getattr(user, "email", "") or ""),
        display_name=metadata.get("display_name"),
    )
