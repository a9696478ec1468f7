"""Request dependencies: container access, authentication and admin checks."""

from fastapi import Depends, Header, HTTPException, Request, status

from smartmeal.containers import AppContainer
from smartmeal.domain.models import UserProfile

_BEARER = "bearer"


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != _BEARER or not token.strip():
        return None
    return token.strip()


async def current_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserProfile:
    """Resolve the bearer token to the caller's profile, creating it if new."""
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    auth_user = container.auth_service.current_user(token)
    return container.user_service.ensure_profile(auth_user)


async def require_setup(user: UserProfile = Depends(current_user)) -> UserProfile:
    """Ensure the caller finished the setup wizard."""
    if not user.is_setup_complete and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Profile setup required"
        )
    return user


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> None:
    """Accept the operator token or a signed-in user with the admin role."""
    if x_admin_token:
        if x_admin_token != container.settings.admin_token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        return
    user = await current_user(authorization, container)
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
