# storefront_api/schemas/auth.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..db.models import UserRole
from .common import APIModel, AddressModel


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class RegisterRequest(APIModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ShippingAddressInput(APIModel):
    """
    Address as posted by the storefront. Fields are optional here so the
    service can reject incomplete addresses with its own message.
    """

    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None

    def is_complete(self) -> bool:
        return all((self.address, self.city, self.region, self.zip_code, self.country))


class UpdateProfileRequest(APIModel):
    """
    Partial profile update. Empty strings count as "not supplied".
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    shipping_address: Optional[ShippingAddressInput] = None

    @field_validator("first_name", "last_name", "email", "phone_number", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class SessionUser(APIModel):
    id: str
    first_name: str
    last_name: str
    email: str
    role: UserRole
    token: Optional[str] = None


class Profile(APIModel):
    id: str
    first_name: str
    last_name: str
    email: str
    role: UserRole
    phone_number: Optional[str] = None
    created_at: datetime
    shipping_address: Optional[AddressModel] = None


__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "ShippingAddressInput",
    "UpdateProfileRequest",
    "SessionUser",
    "Profile",
]
