# storefront_api/security.py
"""
Credential hashing and session tokens.

Session tokens are HS256 JWTs carrying ``userId`` and ``role``. Callers
decode them into a ``SessionClaims`` value and authorize against a required
role, getting back one of three outcomes:

- ``Unauthenticated``: no token, or a token that fails verification
- ``Unauthorized``: a valid token whose role is not allowed
- ``Authorized``: a valid token with acceptable claims
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import bcrypt
import jwt

from storefront_api.db.models import UserRole

JWT_ALGORITHM = "HS256"

# bcrypt only reads the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str, rounds: int = 12) -> str:
    digest = bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], bcrypt.gensalt(rounds=rounds))
    return digest.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:_BCRYPT_MAX_BYTES],
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


# ---------------------------------------------------------------------------
# Session tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class Unauthenticated:
    reason: str


@dataclass(frozen=True)
class Unauthorized:
    claims: SessionClaims
    reason: str


@dataclass(frozen=True)
class Authorized:
    claims: SessionClaims


AuthResult = Union[Unauthenticated, Unauthorized, Authorized]


class TokenError(Exception):
    """Raised when a session token cannot be verified."""


def create_token(claims: SessionClaims, *, secret: str, ttl_seconds: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": claims.user_id,
        "role": claims.role.value,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, *, secret: str) -> SessionClaims:
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError("Invalid token") from exc

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise TokenError("Invalid token payload")
    try:
        role = UserRole(payload.get("role"))
    except ValueError as exc:
        raise TokenError("Invalid token payload") from exc

    return SessionClaims(user_id=user_id, role=role)


def authorize(
    token: Optional[str],
    *,
    secret: str,
    required_role: Optional[UserRole] = None,
) -> AuthResult:
    """
    Decode ``token`` and check it against ``required_role`` (any role when
    ``None``).
    """
    if not token:
        return Unauthenticated("Not authorized, no token")

    try:
        claims = decode_token(token, secret=secret)
    except TokenError:
        return Unauthenticated("Not authorized, token failed")

    if required_role is not None and claims.role != required_role:
        return Unauthorized(claims, f"Not authorized as an {required_role.value}")

    return Authorized(claims)


__all__ = [
    "JWT_ALGORITHM",
    "hash_password",
    "verify_password",
    "SessionClaims",
    "Unauthenticated",
    "Unauthorized",
    "Authorized",
    "AuthResult",
    "TokenError",
    "create_token",
    "decode_token",
    "authorize",
]
