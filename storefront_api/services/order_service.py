# storefront_api/services/order_service.py
"""
Checkout and order history.

Creating an order is one transaction: optional phone update, default
address swap, order row and snapshot line items. The confirmation email is
prepared after the commit and sent in the background; nothing about it can
fail the order.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront_api.db import transaction
from storefront_api.db.models import Order, OrderStatus, PaymentStatus
from storefront_api.errors import InternalError, NotFoundError, ValidationError
from storefront_api.logging import get_logger
from storefront_api.repositories import AddressesRepository, OrdersRepository, UsersRepository
from storefront_api.schemas.auth import ShippingAddressInput
from storefront_api.schemas.common import AddressModel
from storefront_api.schemas.orders import (
    CreateOrderRequest,
    OrderCreated,
    OrderItemInput,
    OrderItemOut,
    OrderOut,
    OrderTracking,
)
from .email_templates import (
    EmailAddress,
    EmailLine,
    OrderEmail,
    build_order_confirmation_email,
    format_date,
)
from .notifier import Notifier

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Order codes
# ---------------------------------------------------------------------------

ORDER_CODE_PREFIX = "AT-"
# No 0/O or 1/I, which are easy to misread.
ORDER_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ORDER_CODE_LENGTH = 8
ORDER_CODE_ATTEMPTS = 5

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def generate_order_code() -> str:
    body = "".join(secrets.choice(ORDER_CODE_ALPHABET) for _ in range(ORDER_CODE_LENGTH))
    return f"{ORDER_CODE_PREFIX}{body}"


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def to_order_out(order: Order) -> OrderOut:
    customer = order.customer
    address = order.shipping_address
    return OrderOut(
        id=order.id,
        customer_id=order.customer_id,
        customer_name=customer.full_name if customer is not None else "Customer",
        customer_email=customer.email if customer is not None else "",
        date=format_date(order.created_at),
        created_at=order.created_at,
        total=order.total,
        subtotal=order.subtotal,
        tax=order.tax,
        shipping_cost=order.shipping_cost,
        status=order.status,
        payment_status=order.payment_status,
        items=[
            OrderItemOut(
                product_id=item.product_id,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                image=item.image or "",
                selected_options=item.selected_options or [],
            )
            for item in order.items
        ],
        shipping_address=AddressModel.model_validate(address) if address is not None else None,
        tracking_number=order.tracking_number,
    )


@dataclass(frozen=True)
class OutgoingEmail:
    order_id: str
    to: str
    subject: str
    html: str


def send_order_confirmation(notifier: Notifier, email: OutgoingEmail) -> None:
    """
    Background task: one delivery attempt, failures are logged only.
    """
    try:
        notifier.send_email(to=email.to, subject=email.subject, html=email.html)
    except Exception:
        logger.exception("order_confirmation_failed", order_id=email.order_id)
        return
    logger.info("order_confirmation_sent", order_id=email.order_id)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class OrderService:
    def __init__(
        self,
        session: Session,
        *,
        code_factory: Callable[[], str] = generate_order_code,
    ) -> None:
        self._session = session
        self._code_factory = code_factory
        self._orders = OrdersRepository(session)
        self._users = UsersRepository(session)
        self._addresses = AddressesRepository(session)

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    @staticmethod
    def validate(payload: CreateOrderRequest) -> Tuple[List[OrderItemInput], ShippingAddressInput]:
        """
        Reject an unusable cart before anything is written. Returns the
        cart lines and the complete shipping address.
        """
        items = payload.items or []
        if not items:
            raise ValidationError("Order items are required")

        address = payload.shipping_address
        if address is None or not address.is_complete():
            raise ValidationError("Shipping address is required")

        for item in items:
            if not item.product_id or not item.name or item.price is None:
                raise ValidationError("Invalid order items")
        return items, address

    def allocate_code(self) -> str:
        """
        Draw order codes until one is unused, at most ``ORDER_CODE_ATTEMPTS``
        times. The primary key still rejects a code taken concurrently.
        """
        for attempt in range(1, ORDER_CODE_ATTEMPTS + 1):
            code = self._code_factory()
            if not self._orders.exists(code):
                return code
            logger.warning("order_code_collision", attempt=attempt)
        raise InternalError("Could not allocate an order code")

    def create_order(self, user_id: str, payload: CreateOrderRequest) -> OrderCreated:
        items, address = self.validate(payload)

        lines: List[Dict[str, Any]] = []
        subtotal = ZERO
        for item in items:
            price = _money(item.price)  # type: ignore[arg-type]
            quantity = item.quantity or 1
            subtotal += price * quantity
            lines.append(
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "price": price,
                    "quantity": quantity,
                    "image": item.image or "",
                    "selected_options": list(item.selected_options or []),
                }
            )
        subtotal = _money(subtotal)
        tax = ZERO
        shipping_cost = ZERO
        total = subtotal + tax + shipping_cost

        code = self.allocate_code()

        try:
            with transaction(self._session):
                user = self._users.lock(user_id)
                if user is None:
                    raise InternalError("Failed to create order")

                if payload.phone_number:
                    self._users.set_phone_number(user_id, payload.phone_number)

                shipping = self._addresses.replace_default(
                    user_id,
                    address=address.address or "",
                    city=address.city or "",
                    region=address.region or "",
                    zip_code=address.zip_code or "",
                    country=address.country or "",
                )
                order = self._orders.create(
                    id=code,
                    customer_id=user_id,
                    shipping_address_id=shipping.id,
                    subtotal=subtotal,
                    tax=tax,
                    shipping_cost=shipping_cost,
                    total=total,
                    status=OrderStatus.PROCESSING,
                    payment_status=PaymentStatus.PAID,
                )
                self._orders.add_items(order, lines)
        except SQLAlchemyError as exc:
            logger.error("order_create_failed", user_id=user_id, error=str(exc))
            raise InternalError("Failed to create order") from exc

        logger.info("order_created", order_id=code, user_id=user_id, items=len(lines), total=str(total))
        return OrderCreated(id=code, total=total)

    def prepare_confirmation(self, order_id: str) -> Optional[OutgoingEmail]:
        """
        Render the confirmation email for a committed order.

        Runs inside the request (the session is gone once background tasks
        run). Any failure is logged and yields ``None``.
        """
        try:
            order = self._orders.get(order_id)
            if order is None or order.customer is None:
                return None
            customer = order.customer
            address = order.shipping_address
            rendered = build_order_confirmation_email(
                OrderEmail(
                    order_id=order.id,
                    customer_name=customer.full_name,
                    customer_email=customer.email,
                    date=format_date(datetime.now(timezone.utc)),
                    items=[
                        EmailLine(
                            name=item.name,
                            quantity=item.quantity,
                            price=item.price,
                            selected_options=tuple(item.selected_options or ()),
                        )
                        for item in order.items
                    ],
                    subtotal=order.subtotal,
                    shipping_cost=order.shipping_cost,
                    tax=order.tax,
                    total=order.total,
                    shipping_address=EmailAddress(
                        address=address.address if address else "",
                        city=address.city if address else "",
                        region=address.region if address else "",
                        zip_code=address.zip_code if address else "",
                        country=address.country if address else "",
                    ),
                )
            )
        except Exception:
            logger.exception("order_confirmation_failed", order_id=order_id)
            return None

        return OutgoingEmail(order_id=order.id, to=customer.email, subject=rendered.subject, html=rendered.html)

    # ------------------------------------------------------------------
    # History & tracking
    # ------------------------------------------------------------------

    def list_for_customer(self, user_id: str) -> List[OrderOut]:
        return [to_order_out(o) for o in self._orders.list_for_customer(user_id)]

    def get_for_customer(self, user_id: str, order_id: str) -> OrderOut:
        order = self._orders.get(order_id)
        # Someone else's order is reported exactly like a missing one.
        if order is None or order.customer_id != user_id:
            raise NotFoundError("Order not found")
        return to_order_out(order)

    def get_tracking(self, order_id: str) -> OrderTracking:
        order = self._orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return OrderTracking(
            id=order.id,
            status=order.status,
            payment_status=order.payment_status,
            tracking_number=order.tracking_number,
            created_at=order.created_at,
            date=format_date(order.created_at),
        )


__all__ = [
    "ORDER_CODE_PREFIX",
    "ORDER_CODE_ALPHABET",
    "ORDER_CODE_LENGTH",
    "ORDER_CODE_ATTEMPTS",
    "generate_order_code",
    "to_order_out",
    "OutgoingEmail",
    "send_order_confirmation",
    "OrderService",
]
