# storefront_api/services/catalog_service.py

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from itertools import islice
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront_api.db.models import ProductCondition
from storefront_api.errors import NotFoundError, ValidationError
from storefront_api.repositories import (
    CategoriesRepository,
    HeroSlidesRepository,
    ProductSort,
    ProductsRepository,
    PromoBannersRepository,
)
from storefront_api.schemas.catalog import (
    CategoryOut,
    HeroSlideOut,
    LandingPage,
    ProductOut,
    PromoBannerOut,
)
from .product_fields import to_product_out

LANDING_SECTION_SIZE = 4


@dataclass
class ProductFilter:
    """
    Storefront listing options. Every supplied option narrows the result.
    """

    category: Optional[str] = None
    query: Optional[str] = None
    conditions: List[ProductCondition] = field(default_factory=list)
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    sort: ProductSort = ProductSort.NEWEST

    @classmethod
    def from_query(
        cls,
        *,
        category: Optional[str] = None,
        q: Optional[str] = None,
        condition: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort: Optional[str] = None,
    ) -> "ProductFilter":
        """
        Build a filter from raw query-string values (``condition`` is a
        comma-separated list). Unknown sort keys fall back to newest first.
        """
        conditions: List[ProductCondition] = []
        for raw in (condition or "").split(","):
            raw = raw.strip()
            if not raw:
                continue
            try:
                conditions.append(ProductCondition(raw))
            except ValueError as exc:
                raise ValidationError(f"Invalid condition: {raw}") from exc

        try:
            sort_key = ProductSort(sort) if sort else ProductSort.NEWEST
        except ValueError:
            sort_key = ProductSort.NEWEST

        return cls(
            category=category or None,
            query=(q or "").strip() or None,
            conditions=conditions,
            min_price=min_price,
            max_price=max_price,
            sort=sort_key,
        )


class CatalogService:
    """
    Read-only storefront catalog: product listing and detail, categories
    and the landing page.
    """

    def __init__(self, session: Session) -> None:
        self._products = ProductsRepository(session)
        self._categories = CategoriesRepository(session)
        self._slides = HeroSlidesRepository(session)
        self._banners = PromoBannersRepository(session)

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[ProductOut]:
        f = product_filter or ProductFilter()
        rows = self._products.search(
            category_slug=f.category,
            query=f.query,
            conditions=f.conditions,
            min_price=f.min_price,
            max_price=f.max_price,
            sort=f.sort,
        )
        return [to_product_out(p) for p in rows]

    def get_product(self, product_id: str) -> ProductOut:
        # Detail lookups do not filter on is_active.
        product = self._products.get_with_category(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return to_product_out(product)

    def list_categories(self) -> List[CategoryOut]:
        rows = self._categories.list_all(
            self._categories.model.sort_order.asc(),
            self._categories.model.id.asc(),
        )
        return [CategoryOut.model_validate(c) for c in rows]

    def get_landing_page(self) -> LandingPage:
        """
        Active slides, active products and active banners, with the product
        list split into featured, best-seller and newest sections of at most
        four items each.
        """
        slides = self._slides.list_active()
        products = [to_product_out(p) for p in self._products.list_active()]
        banners = self._banners.list_active()

        return LandingPage(
            hero_slides=[HeroSlideOut.model_validate(s) for s in slides],
            products=products,
            featured_products=_take(p for p in products if p.is_featured),
            best_sellers=_take(p for p in products if p.is_best_seller),
            latest_products=_take(p for p in products if p.is_new),
            promo_banners=[PromoBannerOut.model_validate(b) for b in banners],
        )


def _take(items, limit: int = LANDING_SECTION_SIZE) -> List[ProductOut]:
    return list(islice(items, limit))


__all__ = ["CatalogService", "ProductFilter", "LANDING_SECTION_SIZE"]
