"""Authentication delegated to the hosted identity service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from smartmeal.domain.auth import AuthSession, AuthUser
from smartmeal.errors import ValidationError

_logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthGateway(Protocol):
    """Interface for the hosted auth provider."""

    def sign_up(self, email: str, password: str, display_name: str) -> AuthSession:
        """Register an e-mail/password identity and return its session."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with e-mail and password."""

    def get_user(self, access_token: str) -> AuthUser:
        """Resolve an access token to its user."""


@dataclass
class AuthService:
    """Application service for sign-up, sign-in and token checks."""

    gateway: AuthGateway

    def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> AuthSession:
        """Create an account with a display name built from the given names."""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        display_name = f"{first_name.strip()} {last_name.strip()}".strip()
        session = self.gateway.sign_up(email.strip(), password, display_name)
        _logger.info("Registered user %s", session.user.id)
        return session

    def login(self, email: str, password: str) -> AuthSession:
        """Sign in and return the session."""
        return self.gateway.sign_in(email.strip(), password)

    def current_user(self, access_token: str) -> AuthUser:
        """Return the user an access token belongs to."""
        return self.gateway.get_user(access_token)
