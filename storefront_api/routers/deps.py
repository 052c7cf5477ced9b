# storefront_api/routers/deps.py
from __future__ import annotations

from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront_api.config import Settings
from storefront_api.container import Container
from storefront_api.db.models import UserRole
from storefront_api.errors import AuthError, ForbiddenError
from storefront_api.security import (
    Authorized,
    SessionClaims,
    Unauthorized,
    authorize,
)

# auto_error=False: a missing header is not an error when the cookie is set.
bearer_scheme = HTTPBearer(auto_error=False)


# -----------------------------------------------------------------------------
# Container & session
# -----------------------------------------------------------------------------


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_settings(container: Container = Depends(get_container)) -> Settings:
    return container.settings()


def get_db(container: Container = Depends(get_container)) -> Generator[Session, None, None]:
    """
    One SQLAlchemy session per request, always closed afterwards. Services
    commit their own transactions.
    """
    session = container.session_factory()()
    try:
        yield session
    finally:
        session.close()


# -----------------------------------------------------------------------------
# Security: session token
# -----------------------------------------------------------------------------


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_settings),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Session token from the cookie, or from ``Authorization: Bearer`` when
    there is no cookie.
    """
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie:
        return cookie
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


def _resolve(token: Optional[str], settings: Settings, required_role: Optional[UserRole]) -> SessionClaims:
    result = authorize(token, secret=settings.JWT_SECRET, required_role=required_role)
    if isinstance(result, Authorized):
        return result.claims
    if isinstance(result, Unauthorized):
        raise ForbiddenError(result.reason)
    raise AuthError(result.reason)


def require_user(
    token: Optional[str] = Depends(get_session_token),
    settings: Settings = Depends(get_settings),
) -> SessionClaims:
    return _resolve(token, settings, None)


def require_admin(
    token: Optional[str] = Depends(get_session_token),
    settings: Settings = Depends(get_settings),
) -> SessionClaims:
    return _resolve(token, settings, UserRole.ADMIN)
