# storefront_api/schemas/newsletter.py

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr

from .common import APIModel


class SubscribeRequest(APIModel):
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UnsubscribeRequest(APIModel):
    email: EmailStr


__all__ = ["SubscribeRequest", "UnsubscribeRequest"]
