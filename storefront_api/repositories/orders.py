# storefront_api/repositories/orders.py

from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import Select, select
from sqlalchemy.orm import joinedload, selectinload

from ..db import models
from .base import SQLRepository


class OrdersRepository(SQLRepository[models.Order]):
    """
    Data access for ``orders`` and their line items.

    Reads load the customer, the shipping address and the items up front so
    the order can be mapped to its wire form after the session is gone.
    """

    model = models.Order

    def _base_select(self) -> Select[Any]:
        return select(models.Order).options(
            joinedload(models.Order.customer),
            joinedload(models.Order.shipping_address),
            selectinload(models.Order.items),
        )

    def exists(self, order_id: str) -> bool:
        stmt = select(models.Order.id).where(models.Order.id == order_id).limit(1)
        return self.session.execute(stmt).first() is not None

    def get(self, order_id: str) -> Optional[models.Order]:
        stmt = self._base_select().where(models.Order.id == order_id)
        return self.session.execute(stmt).unique().scalar_one_or_none()

    def list_for_customer(self, customer_id: str) -> Sequence[models.Order]:
        stmt = (
            self._base_select()
            .where(models.Order.customer_id == customer_id)
            .order_by(models.Order.created_at.desc())
        )
        return list(self.session.execute(stmt).unique().scalars().all())

    def list_all(self, *order_by: Any) -> Sequence[models.Order]:
        stmt = self._base_select().order_by(*(order_by or (models.Order.created_at.desc(),)))
        return list(self.session.execute(stmt).unique().scalars().all())

    def add_items(self, order: models.Order, items: Sequence[dict[str, Any]]) -> None:
        """
        Attach snapshot line items to ``order`` in the given order.
        """
        for position, fields in enumerate(items):
            order.items.append(models.OrderItem(position=position, **fields))
        self.session.flush()
