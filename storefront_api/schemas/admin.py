# storefront_api/schemas/admin.py

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import Field

from ..db.models import ProductCondition, UserRole, UserStatus
from .catalog import CategoryOut, ColorOption, GradeOption, ProductOut, SizeOption, SpecEntry
from .common import APIModel, AddressModel, Money


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class CategoryRef(APIModel):
    id: int


class ProductCreate(APIModel):
    """
    Back-office product form. The category may be given as ``categoryId``,
    as a category name in ``category``, or as a ``{"id": ...}`` object.
    Client-supplied ``id`` and timestamps are ignored.
    """

    name: str = Field(..., min_length=1, max_length=255)
    category_id: Optional[int] = None
    category: Optional[Union[CategoryRef, str]] = None
    price: Decimal = Field(..., ge=0)
    original_price: Decimal = Field(..., ge=0)
    image: str
    condition: ProductCondition = ProductCondition.NEW
    is_new: bool = False
    is_best_seller: bool = False
    is_featured: bool = False
    is_active: bool = True
    stock: int = Field(0, ge=0)
    description: Optional[str] = None
    colors: List[ColorOption] = Field(default_factory=list)
    storage_options: List[SizeOption] = Field(default_factory=list)
    memory_options: List[SizeOption] = Field(default_factory=list)
    grades: List[GradeOption] = Field(default_factory=list)
    specs: List[SpecEntry] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class ProductUpdate(APIModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category_id: Optional[int] = None
    category: Optional[Union[CategoryRef, str]] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    original_price: Optional[Decimal] = Field(default=None, ge=0)
    image: Optional[str] = None
    condition: Optional[ProductCondition] = None
    is_new: Optional[bool] = None
    is_best_seller: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    stock: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None
    colors: Optional[List[ColorOption]] = None
    storage_options: Optional[List[SizeOption]] = None
    memory_options: Optional[List[SizeOption]] = None
    grades: Optional[List[GradeOption]] = None
    specs: Optional[List[SpecEntry]] = None
    images: Optional[List[str]] = None


class AdminProductOut(ProductOut):
    """Admin view: the full category row instead of just its name."""

    category: Optional[CategoryOut] = None  # type: ignore[assignment]
    category_id: int
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Categories & CMS content
# ---------------------------------------------------------------------------


class CategoryCreate(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)
    image: Optional[str] = None
    href: Optional[str] = None
    sort_order: int = 0


class CategoryUpdate(APIModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=100)
    image: Optional[str] = None
    href: Optional[str] = None
    sort_order: Optional[int] = None


class HeroSlideCreate(APIModel):
    content: str
    image: str
    cta: str
    href: str
    sort_order: int = 0
    is_active: bool = True


class HeroSlideUpdate(APIModel):
    content: Optional[str] = None
    image: Optional[str] = None
    cta: Optional[str] = None
    href: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class PromoBannerCreate(APIModel):
    content: str
    cta_text: str
    cta_link: str
    bg_color: str = "#f5f5f7"
    image: str
    sort_order: int = 0
    is_active: bool = True


class PromoBannerUpdate(APIModel):
    content: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    bg_color: Optional[str] = None
    image: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


# ---------------------------------------------------------------------------
# Customers & orders
# ---------------------------------------------------------------------------


class CustomerOut(APIModel):
    id: str
    first_name: str
    last_name: str
    name: str
    email: str
    phone_number: Optional[str] = None
    role: UserRole
    status: UserStatus
    created_at: datetime
    last_active_at: Optional[datetime] = None
    shipping_address: Optional[AddressModel] = None
    order_count: int = 0
    total_spent: Money = Decimal("0.00")


class OrderStatusUpdate(APIModel):
    """
    ``status`` is checked against the order status values by the service so
    an unknown value gets a plain 400 message.
    """

    status: str
    tracking_number: Optional[str] = None


__all__ = [
    "CategoryRef",
    "ProductCreate",
    "ProductUpdate",
    "AdminProductOut",
    "CategoryCreate",
    "CategoryUpdate",
    "HeroSlideCreate",
    "HeroSlideUpdate",
    "PromoBannerCreate",
    "PromoBannerUpdate",
    "CustomerOut",
    "OrderStatusUpdate",
]
