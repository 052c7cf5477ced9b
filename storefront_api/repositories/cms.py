# storefront_api/repositories/cms.py

from __future__ import annotations

from typing import Sequence

from ..db import models
from .base import SQLRepository


class HeroSlidesRepository(SQLRepository[models.HeroSlide]):
    model = models.HeroSlide

    def list_active(self) -> Sequence[models.HeroSlide]:
        stmt = (
            self._base_select()
            .where(models.HeroSlide.is_active.is_(True))
            .order_by(models.HeroSlide.sort_order.asc(), models.HeroSlide.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())


class PromoBannersRepository(SQLRepository[models.PromoBanner]):
    model = models.PromoBanner

    def list_active(self) -> Sequence[models.PromoBanner]:
        stmt = (
            self._base_select()
            .where(models.PromoBanner.is_active.is_(True))
            .order_by(models.PromoBanner.sort_order.asc(), models.PromoBanner.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())
