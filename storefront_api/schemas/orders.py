# storefront_api/schemas/orders.py

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from ..db.models import OrderStatus, PaymentStatus
from .auth import ShippingAddressInput
from .common import APIModel, AddressModel, Money


# ---------------------------------------------------------------------------
# Checkout payload
# ---------------------------------------------------------------------------


class OrderItemInput(APIModel):
    """
    One cart line. Presence of ``productId``, ``name`` and ``price`` is
    checked by the order service so a bad line is reported as
    "Invalid order items" rather than a field-level error.
    """

    product_id: Optional[str] = None
    name: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    # Missing or 0 counts as 1.
    quantity: Optional[int] = Field(default=None, ge=0)
    image: Optional[str] = None
    selected_options: Optional[List[str]] = None


class CreateOrderRequest(APIModel):
    items: Optional[List[OrderItemInput]] = None
    shipping_address: Optional[ShippingAddressInput] = None
    phone_number: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class OrderCreated(APIModel):
    id: str
    total: Money


class OrderItemOut(APIModel):
    product_id: str
    name: str
    price: Money
    quantity: int
    image: str = ""
    selected_options: List[str] = Field(default_factory=list)


class OrderOut(APIModel):
    id: str
    customer_id: str
    customer_name: str
    customer_email: str
    date: str
    created_at: datetime
    total: Money
    subtotal: Money
    tax: Money
    shipping_cost: Money
    status: OrderStatus
    payment_status: PaymentStatus
    items: List[OrderItemOut] = Field(default_factory=list)
    shipping_address: Optional[AddressModel] = None
    tracking_number: Optional[str] = None


class OrderTracking(APIModel):
    """Public tracking view; carries no customer data."""

    id: str
    status: OrderStatus
    payment_status: PaymentStatus
    tracking_number: Optional[str] = None
    created_at: datetime
    date: str


__all__ = [
    "OrderItemInput",
    "CreateOrderRequest",
    "OrderCreated",
    "OrderItemOut",
    "OrderOut",
    "OrderTracking",
]
