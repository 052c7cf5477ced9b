# storefront_api/repositories/categories.py

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from ..db import models
from .base import SQLRepository


class CategoriesRepository(SQLRepository[models.Category]):
    model = models.Category

    def get_by_name(self, name: str) -> Optional[models.Category]:
        stmt = self._base_select().where(models.Category.name == name).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_slug(self, slug: str) -> Optional[models.Category]:
        stmt = self._base_select().where(models.Category.slug == slug).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def has_products(self, category_id: int) -> bool:
        """
        True if at least one product still references the category.
        """
        stmt = select(models.Product.id).where(models.Product.category_id == category_id).limit(1)
        return self.session.execute(stmt).first() is not None
