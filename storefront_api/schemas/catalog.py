# storefront_api/schemas/catalog.py

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from ..db.models import ProductCondition
from .common import APIModel, Money


# ---------------------------------------------------------------------------
# Variant option shapes (decoded from the product JSON columns)
# ---------------------------------------------------------------------------


class ColorOption(APIModel):
    name: str
    value: str


class SizeOption(APIModel):
    """Storage or memory tier with its price adjustment."""

    size: str
    price_bump: Money = Decimal("0")


class GradeOption(APIModel):
    name: str
    price_bump: Money = Decimal("0")


class SpecEntry(APIModel):
    label: str
    value: str


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------


class CategoryOut(APIModel):
    id: int
    name: str
    slug: str
    image: Optional[str] = None
    href: Optional[str] = None
    sort_order: int = 0


class ProductOut(APIModel):
    """
    Public product view. ``category`` is the category name and the list
    fields are already decoded.
    """

    id: str
    name: str
    price: Money
    original_price: Money
    image: str
    category: Optional[str] = None
    category_slug: Optional[str] = None
    condition: ProductCondition
    is_new: bool = False
    is_best_seller: bool = False
    is_featured: bool = False
    is_active: bool = True
    stock: int = 0
    description: Optional[str] = None
    colors: List[ColorOption] = Field(default_factory=list)
    storage_options: List[SizeOption] = Field(default_factory=list)
    memory_options: List[SizeOption] = Field(default_factory=list)
    grades: List[GradeOption] = Field(default_factory=list)
    specs: List[SpecEntry] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class HeroSlideOut(APIModel):
    id: int
    content: str
    image: str
    cta: str
    href: str
    sort_order: int = 0
    is_active: bool = True


class PromoBannerOut(APIModel):
    id: int
    content: str
    cta_text: str
    cta_link: str
    bg_color: str
    image: str
    sort_order: int = 0
    is_active: bool = True


class LandingPage(APIModel):
    hero_slides: List[HeroSlideOut]
    products: List[ProductOut]
    featured_products: List[ProductOut]
    best_sellers: List[ProductOut]
    latest_products: List[ProductOut]
    promo_banners: List[PromoBannerOut]


__all__ = [
    "ColorOption",
    "SizeOption",
    "GradeOption",
    "SpecEntry",
    "CategoryOut",
    "ProductOut",
    "HeroSlideOut",
    "PromoBannerOut",
    "LandingPage",
]
