# storefront_api/services/auth_service.py

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront_api.config import Settings
from storefront_api.db import transaction
from storefront_api.db.models import User, UserStatus
from storefront_api.errors import AuthError, ConflictError, NotFoundError, ValidationError
from storefront_api.logging import get_logger
from storefront_api.repositories import AddressesRepository, UsersRepository
from storefront_api.schemas.auth import (
    LoginRequest,
    Profile,
    RegisterRequest,
    SessionUser,
    UpdateProfileRequest,
)
from storefront_api.schemas.common import AddressModel
from storefront_api.security import SessionClaims, create_token, hash_password, verify_password

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """
    Accounts and sessions.

    - registration and login (bcrypt hashes, signed session tokens)
    - the caller's profile and default shipping address
    - account deactivation
    """

    def __init__(self, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._users = UsersRepository(session)
        self._addresses = AddressesRepository(session)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def issue_token(self, user: User) -> str:
        claims = SessionClaims(user_id=user.id, role=user.role)
        return create_token(
            claims,
            secret=self._settings.JWT_SECRET,
            ttl_seconds=self._settings.token_ttl_seconds,
        )

    def register(self, payload: RegisterRequest) -> SessionUser:
        email = str(payload.email)
        if self._users.get_by_email(email) is not None:
            raise ConflictError("Email already in use")

        password_hash = hash_password(payload.password, rounds=self._settings.BCRYPT_ROUNDS)
        try:
            with transaction(self._session):
                user = self._users.create(
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    email=email,
                    password_hash=password_hash,
                )
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email.
            raise ConflictError("Email already in use") from exc

        logger.info("user_registered", user_id=user.id)
        return self._session_user(user, token=self.issue_token(user))

    def login(self, payload: LoginRequest) -> SessionUser:
        user = self._users.get_by_email(str(payload.email))
        if user is None or not verify_password(payload.password, user.password_hash):
            raise AuthError(INVALID_CREDENTIALS)

        with transaction(self._session):
            self._users.touch_last_active(user.id)

        logger.info("user_logged_in", user_id=user.id)
        return self._session_user(user, token=self.issue_token(user))

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_profile(self, user_id: str) -> Profile:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return self._profile(user)

    def update_profile(self, user_id: str, payload: UpdateProfileRequest) -> Profile:
        """
        Apply the supplied profile fields and, when a shipping address is
        given, make it the new default address.

        The address is checked before anything is written. The user row is
        locked for the whole update so concurrent calls for the same user
        cannot leave two default addresses.
        """
        address = payload.shipping_address
        if address is not None and not address.is_complete():
            raise ValidationError("Invalid shipping address")

        with transaction(self._session):
            user = self._users.lock(user_id)
            if user is None:
                raise NotFoundError("User not found")

            changes: Dict[str, Any] = {}
            if payload.email:
                email = str(payload.email)
                existing = self._users.get_by_email(email)
                if existing is not None and existing.id != user_id:
                    raise ConflictError("Email already in use")
                changes["email"] = email
            if payload.first_name:
                changes["first_name"] = payload.first_name
            if payload.last_name:
                changes["last_name"] = payload.last_name
            if payload.phone_number:
                changes["phone_number"] = payload.phone_number
            if changes:
                self._users.update(user, changes)

            if address is not None:
                self._addresses.replace_default(
                    user_id,
                    address=address.address or "",
                    city=address.city or "",
                    region=address.region or "",
                    zip_code=address.zip_code or "",
                    country=address.country or "",
                )

        logger.info("profile_updated", user_id=user_id, address_changed=address is not None)
        return self._profile(user)

    def deactivate(self, user_id: str) -> None:
        with transaction(self._session):
            user = self._users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")
            self._users.update(user, {"status": UserStatus.INACTIVE})
        logger.info("account_deactivated", user_id=user_id)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _session_user(user: User, *, token: Optional[str]) -> SessionUser:
        return SessionUser(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=user.role,
            token=token,
        )

    def _profile(self, user: User) -> Profile:
        default = self._addresses.get_default(user.id)
        return Profile(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=user.role,
            phone_number=user.phone_number,
            created_at=user.created_at,
            shipping_address=AddressModel.model_validate(default) if default is not None else None,
        )


__all__ = ["AuthService", "INVALID_CREDENTIALS"]
