# storefront_api/routers/auth.py

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storefront_api.config import Settings
from storefront_api.container import Container
from storefront_api.schemas.auth import (
    LoginRequest,
    Profile,
    RegisterRequest,
    SessionUser,
    UpdateProfileRequest,
)
from storefront_api.schemas.common import Envelope, ok
from storefront_api.security import SessionClaims
from storefront_api.services.auth_service import AuthService

from .deps import get_container, get_db, get_settings, require_user

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db),
) -> AuthService:
    return container.auth_service(session=session)


# -----------------------------------------------------------------------------
# Cookie helpers
# -----------------------------------------------------------------------------


def _cookie_options(settings: Settings) -> dict:
    production = settings.is_production
    return {
        "httponly": True,
        "secure": production,
        "samesite": "none" if production else "lax",
        "path": "/",
    }


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_COOKIE_MAX_AGE,
        **_cookie_options(settings),
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME, **_cookie_options(settings))


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post(
    "/register",
    response_model=Envelope[SessionUser],
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer account",
)
def register(
    payload: RegisterRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> Envelope[SessionUser]:
    user = service.register(payload)
    set_session_cookie(response, user.token or "", settings)
    return ok(user)


@router.post("/login", response_model=Envelope[SessionUser], summary="Sign in")
def login(
    payload: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> Envelope[SessionUser]:
    user = service.login(payload)
    set_session_cookie(response, user.token or "", settings)
    return ok(user)


@router.post("/logout", response_model=Envelope[None], summary="Clear the session cookie")
def logout(response: Response, settings: Settings = Depends(get_settings)) -> Envelope[None]:
    # Stateless: the token itself stays valid until it expires.
    clear_session_cookie(response, settings)
    return ok(message="Logged out successfully")


@router.get("/me", response_model=Envelope[Profile], summary="Current user profile")
def get_me(
    claims: SessionClaims = Depends(require_user),
    service: AuthService = Depends(get_auth_service),
) -> Envelope[Profile]:
    return ok(service.get_profile(claims.user_id))


@router.put("/me", response_model=Envelope[Profile], summary="Update profile and default address")
def update_me(
    payload: UpdateProfileRequest,
    claims: SessionClaims = Depends(require_user),
    service: AuthService = Depends(get_auth_service),
) -> Envelope[Profile]:
    return ok(service.update_profile(claims.user_id, payload))


@router.delete("/me", response_model=Envelope[None], summary="Deactivate the account")
def deactivate_me(
    response: Response,
    claims: SessionClaims = Depends(require_user),
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> Envelope[None]:
    service.deactivate(claims.user_id)
    clear_session_cookie(response, settings)
    return ok(message="Account deactivated successfully")
