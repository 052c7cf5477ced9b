# storefront_api/repositories/products.py

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import Select, func, or_
from sqlalchemy.orm import contains_eager

from ..db import models
from .base import SQLRepository


class ProductSort(str, Enum):
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    A_Z = "a-z"
    NEWEST = "newest"


class ProductsRepository(SQLRepository[models.Product]):
    """
    Data access for ``products``. Every query eagerly joins the category so
    callers can read ``product.category.name`` without extra round-trips.
    """

    model = models.Product

    def _base_select(self) -> Select[Any]:
        return (
            super()
            ._base_select()
            .outerjoin(models.Product.category)
            .options(contains_eager(models.Product.category))
        )

    def get_with_category(self, product_id: str) -> Optional[models.Product]:
        stmt = self._base_select().where(models.Product.id == product_id).limit(1)
        return self.session.execute(stmt).unique().scalar_one_or_none()

    def list_all(self, *order_by: Any) -> Sequence[models.Product]:
        stmt = self._base_select().order_by(*(order_by or (models.Product.created_at.desc(),)))
        return list(self.session.execute(stmt).unique().scalars().all())

    def list_active(self) -> Sequence[models.Product]:
        stmt = (
            self._base_select()
            .where(models.Product.is_active.is_(True))
            .order_by(models.Product.created_at.desc())
        )
        return list(self.session.execute(stmt).unique().scalars().all())

    def search(
        self,
        *,
        category_slug: Optional[str] = None,
        query: Optional[str] = None,
        conditions: Optional[Iterable[models.ProductCondition]] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort: ProductSort = ProductSort.NEWEST,
    ) -> Sequence[models.Product]:
        """
        Active products matching every supplied filter (logical AND).

        ``query`` is a case-insensitive substring match on name or
        description.
        """
        stmt = self._base_select().where(models.Product.is_active.is_(True))

        if category_slug and category_slug != "all":
            stmt = stmt.where(models.Category.slug == category_slug)

        if query:
            needle = query.lower()
            stmt = stmt.where(
                or_(
                    func.lower(models.Product.name).contains(needle, autoescape=True),
                    func.lower(models.Product.description).contains(needle, autoescape=True),
                )
            )

        condition_list = list(conditions or [])
        if condition_list:
            stmt = stmt.where(models.Product.condition.in_(condition_list))

        if min_price is not None:
            stmt = stmt.where(models.Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(models.Product.price <= max_price)

        if sort == ProductSort.PRICE_LOW:
            stmt = stmt.order_by(models.Product.price.asc())
        elif sort == ProductSort.PRICE_HIGH:
            stmt = stmt.order_by(models.Product.price.desc())
        elif sort == ProductSort.A_Z:
            stmt = stmt.order_by(models.Product.name.asc())
        else:
            stmt = stmt.order_by(models.Product.created_at.desc())

        return list(self.session.execute(stmt).unique().scalars().all())
