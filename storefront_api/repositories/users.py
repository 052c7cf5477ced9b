# storefront_api/repositories/users.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import and_, func, select, update

from ..db import models
from .base import SQLRepository


class UsersRepository(SQLRepository[models.User]):
    """
    Data access for ``users``.
    """

    model = models.User

    def get_by_email(self, email: str) -> Optional[models.User]:
        stmt = self._base_select().where(models.User.email == email).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def lock(self, user_id: str) -> Optional[models.User]:
        """
        Load the user row with ``SELECT ... FOR UPDATE`` so concurrent
        writers for the same user are serialized until the transaction ends.
        """
        stmt = self._base_select().where(models.User.id == user_id).with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def touch_last_active(self, user_id: str) -> None:
        self.session.execute(
            update(models.User)
            .where(models.User.id == user_id)
            .values(last_active_at=datetime.now(timezone.utc))
        )

    def set_phone_number(self, user_id: str, phone_number: str) -> None:
        self.session.execute(
            update(models.User)
            .where(models.User.id == user_id)
            .values(phone_number=phone_number)
        )

    def list_customers_with_stats(self) -> Sequence[Any]:
        """
        Customers joined with their default address and an aggregate of
        their orders.

        Each row exposes ``User``, ``Address`` (or None), ``order_count`` and
        ``total_spent``.
        """
        stats = (
            select(
                models.Order.customer_id.label("customer_id"),
                func.count(models.Order.id).label("order_count"),
                func.sum(models.Order.total).label("total_spent"),
            )
            .group_by(models.Order.customer_id)
            .subquery()
        )

        stmt = (
            select(
                models.User,
                models.Address,
                func.coalesce(stats.c.order_count, 0).label("order_count"),
                func.coalesce(stats.c.total_spent, 0).label("total_spent"),
            )
            .outerjoin(
                models.Address,
                and_(
                    models.Address.user_id == models.User.id,
                    models.Address.is_default.is_(True),
                ),
            )
            .outerjoin(stats, stats.c.customer_id == models.User.id)
            .where(models.User.role == models.UserRole.CUSTOMER)
            .order_by(models.User.created_at.desc())
        )
        return list(self.session.execute(stmt).all())
