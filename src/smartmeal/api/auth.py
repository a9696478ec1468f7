"""Sign-up, sign-in and profile endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from smartmeal.api.deps import current_user, get_container
from smartmeal.api.schemas import (
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    SetupRequest,
)
from smartmeal.containers import AppContainer
from smartmeal.domain.auth import AuthSession
from smartmeal.domain.models import UserProfile

router = APIRouter(tags=["auth"])


def _session_payload(session: AuthSession) -> dict[str, object]:
    return {
        "user": asdict(session.user),
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
    }


@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create an account and its profile."""
    session = container.auth_service.register(
        body.email, body.password, body.first_name, body.last_name
    )
    container.user_service.ensure_profile(session.user)
    return _session_payload(session)


@router.post("/auth/login")
async def login(
    body: LoginRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Sign in with e-mail and password."""
    return _session_payload(container.auth_service.login(body.email, body.password))


@router.get("/me")
async def me(user: UserProfile = Depends(current_user)) -> dict[str, object]:
    """Return the caller's profile."""
    return {**asdict(user), "display_name": user.display_name}


@router.patch("/me")
async def update_me(
    body: ProfileUpdate,
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Merge the provided profile fields."""
    return asdict(container.user_service.update_profile(user.id, body.model_dump()))


@router.post("/me/setup")
async def complete_setup(
    body: SetupRequest,
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Store the setup wizard answers."""
    profile = container.user_service.complete_setup(user.id, **body.model_dump())
    return asdict(profile)
