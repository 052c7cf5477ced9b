# storefront_api/services/admin_service.py

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront_api.db import transaction
from storefront_api.db.models import Category, HeroSlide, OrderStatus, Product, PromoBanner
from storefront_api.errors import ConflictError, NotFoundError, ValidationError
from storefront_api.logging import get_logger
from storefront_api.repositories import (
    CategoriesRepository,
    HeroSlidesRepository,
    OrdersRepository,
    ProductsRepository,
    PromoBannersRepository,
    SQLRepository,
    UsersRepository,
)
from storefront_api.schemas.admin import (
    AdminProductOut,
    CategoryCreate,
    CategoryRef,
    CategoryUpdate,
    CustomerOut,
    HeroSlideCreate,
    HeroSlideUpdate,
    OrderStatusUpdate,
    ProductCreate,
    ProductUpdate,
    PromoBannerCreate,
    PromoBannerUpdate,
)
from storefront_api.schemas.catalog import CategoryOut, HeroSlideOut, PromoBannerOut
from storefront_api.schemas.common import AddressModel, CreatedId
from storefront_api.schemas.orders import OrderOut
from .order_service import to_order_out
from .product_fields import decode_variants, encode_variants

logger = get_logger(__name__)

# Product columns that may be cleared with an explicit null.
_NULLABLE_PRODUCT_FIELDS = {"description"}


def _supplied(payload: BaseModel) -> Dict[str, Any]:
    """
    Fields the client actually sent, keeping nested models as objects.
    """
    return {name: getattr(payload, name) for name in payload.model_fields_set}


def _all_fields(payload: BaseModel) -> Dict[str, Any]:
    return {name: getattr(payload, name) for name in type(payload).model_fields}


class AdminService:
    """
    Back-office operations.

    Products, categories, hero slides and promo banners get list, create,
    partial update and hard delete. Customers and orders are read-only
    except for the order status.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._products = ProductsRepository(session)
        self._categories = CategoriesRepository(session)
        self._slides = HeroSlidesRepository(session)
        self._banners = PromoBannersRepository(session)
        self._users = UsersRepository(session)
        self._orders = OrdersRepository(session)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _get_or_404(self, repo: SQLRepository[Any], obj_id: Any, label: str) -> Any:
        obj = repo.get_by_id(obj_id)
        if obj is None:
            raise NotFoundError(f"{label} not found")
        return obj

    def _update(self, repo: SQLRepository[Any], obj_id: Any, fields: Mapping[str, Any], label: str) -> None:
        with transaction(self._session):
            obj = self._get_or_404(repo, obj_id, label)
            if fields:
                repo.update(obj, fields)
        logger.info("admin_row_updated", entity=label.lower(), id=obj_id, fields=sorted(fields))

    def _delete(self, repo: SQLRepository[Any], obj_id: Any, label: str) -> None:
        with transaction(self._session):
            repo.delete(self._get_or_404(repo, obj_id, label))
        logger.info("admin_row_deleted", entity=label.lower(), id=obj_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_products(self) -> List[AdminProductOut]:
        return [self._admin_product(p) for p in self._products.list_all(Product.created_at.desc())]

    def _resolve_category(self, fields: Dict[str, Any]) -> Optional[int]:
        """
        Pop ``category`` / ``category_id`` from ``fields`` and return the
        category id they name, or ``None`` when neither was given.
        """
        category = fields.pop("category", None)
        category_id = fields.pop("category_id", None)

        if isinstance(category, str):
            row = self._categories.get_by_name(category)
            if row is None:
                raise ValidationError(f"Unknown category: {category}")
            return row.id
        if isinstance(category, CategoryRef):
            category_id = category.id

        if category_id is None:
            return None
        if self._categories.get_by_id(category_id) is None:
            raise ValidationError(f"Unknown category id: {category_id}")
        return category_id

    def create_product(self, payload: ProductCreate) -> CreatedId:
        fields = _all_fields(payload)
        category_id = self._resolve_category(fields)
        if category_id is None:
            raise ValidationError("Category is required")
        fields["category_id"] = category_id

        with transaction(self._session):
            product = self._products.create(**encode_variants(fields))
        logger.info("product_created", product_id=product.id)
        return CreatedId(id=product.id)

    def update_product(self, product_id: str, payload: ProductUpdate) -> None:
        fields = _supplied(payload)
        category_id = self._resolve_category(fields)
        if category_id is not None:
            fields["category_id"] = category_id
        fields = {
            key: value
            for key, value in fields.items()
            if value is not None or key in _NULLABLE_PRODUCT_FIELDS
        }
        self._update(self._products, product_id, encode_variants(fields), "Product")

    def delete_product(self, product_id: str) -> None:
        self._delete(self._products, product_id, "Product")

    def _admin_product(self, product: Product) -> AdminProductOut:
        category = product.category
        return AdminProductOut(
            id=product.id,
            name=product.name,
            category_id=product.category_id,
            category=CategoryOut.model_validate(category) if category is not None else None,
            category_slug=category.slug if category is not None else None,
            price=product.price,
            original_price=product.original_price,
            image=product.image,
            condition=product.condition,
            is_new=product.is_new,
            is_best_seller=product.is_best_seller,
            is_featured=product.is_featured,
            is_active=product.is_active,
            stock=product.stock,
            description=product.description,
            created_at=product.created_at,
            updated_at=product.updated_at,
            **decode_variants(product),
        )

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self) -> List[CategoryOut]:
        rows = self._categories.list_all(Category.sort_order.desc(), Category.id.asc())
        return [CategoryOut.model_validate(c) for c in rows]

    def create_category(self, payload: CategoryCreate) -> CreatedId:
        self._check_category_unique(name=payload.name, slug=payload.slug)
        try:
            with transaction(self._session):
                category = self._categories.create(**_all_fields(payload))
        except IntegrityError as exc:
            raise ConflictError("Category name or slug already exists") from exc
        logger.info("category_created", category_id=category.id)
        return CreatedId(id=category.id)

    def update_category(self, category_id: int, payload: CategoryUpdate) -> None:
        fields = {k: v for k, v in _supplied(payload).items() if v is not None or k in ("image", "href")}
        self._check_category_unique(name=fields.get("name"), slug=fields.get("slug"), exclude_id=category_id)
        try:
            self._update(self._categories, category_id, fields, "Category")
        except IntegrityError as exc:
            raise ConflictError("Category name or slug already exists") from exc

    def delete_category(self, category_id: int) -> None:
        """
        Hard delete; refused while any product still references the
        category.
        """
        with transaction(self._session):
            category = self._get_or_404(self._categories, category_id, "Category")
            if self._categories.has_products(category_id):
                raise ConflictError("Cannot delete category with products")
            self._categories.delete(category)
        logger.info("admin_row_deleted", entity="category", id=category_id)

    def _check_category_unique(
        self,
        *,
        name: Optional[str],
        slug: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> None:
        for found in (
            self._categories.get_by_name(name) if name else None,
            self._categories.get_by_slug(slug) if slug else None,
        ):
            if found is not None and found.id != exclude_id:
                raise ConflictError("Category name or slug already exists")

    # ------------------------------------------------------------------
    # Hero slides & promo banners
    # ------------------------------------------------------------------

    def list_hero_slides(self) -> List[HeroSlideOut]:
        rows = self._slides.list_all(HeroSlide.sort_order.asc(), HeroSlide.id.asc())
        return [HeroSlideOut.model_validate(s) for s in rows]

    def create_hero_slide(self, payload: HeroSlideCreate) -> CreatedId:
        with transaction(self._session):
            slide = self._slides.create(**_all_fields(payload))
        logger.info("hero_slide_created", slide_id=slide.id)
        return CreatedId(id=slide.id)

    def update_hero_slide(self, slide_id: int, payload: HeroSlideUpdate) -> None:
        fields = {k: v for k, v in _supplied(payload).items() if v is not None}
        self._update(self._slides, slide_id, fields, "Hero slide")

    def delete_hero_slide(self, slide_id: int) -> None:
        self._delete(self._slides, slide_id, "Hero slide")

    def list_promo_banners(self) -> List[PromoBannerOut]:
        rows = self._banners.list_all(PromoBanner.sort_order.asc(), PromoBanner.id.asc())
        return [PromoBannerOut.model_validate(b) for b in rows]

    def create_promo_banner(self, payload: PromoBannerCreate) -> CreatedId:
        with transaction(self._session):
            banner = self._banners.create(**_all_fields(payload))
        logger.info("promo_banner_created", banner_id=banner.id)
        return CreatedId(id=banner.id)

    def update_promo_banner(self, banner_id: int, payload: PromoBannerUpdate) -> None:
        fields = {k: v for k, v in _supplied(payload).items() if v is not None}
        self._update(self._banners, banner_id, fields, "Promo banner")

    def delete_promo_banner(self, banner_id: int) -> None:
        self._delete(self._banners, banner_id, "Promo banner")

    # ------------------------------------------------------------------
    # Customers & orders
    # ------------------------------------------------------------------

    def list_customers(self) -> List[CustomerOut]:
        out: List[CustomerOut] = []
        for user, address, order_count, total_spent in self._users.list_customers_with_stats():
            out.append(
                CustomerOut(
                    id=user.id,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    name=user.full_name,
                    email=user.email,
                    phone_number=user.phone_number,
                    role=user.role,
                    status=user.status,
                    created_at=user.created_at,
                    last_active_at=user.last_active_at,
                    shipping_address=AddressModel.model_validate(address) if address is not None else None,
                    order_count=int(order_count or 0),
                    total_spent=Decimal(str(total_spent or 0)).quantize(Decimal("0.01")),
                )
            )
        return out

    def list_orders(self) -> List[OrderOut]:
        return [to_order_out(o) for o in self._orders.list_all()]

    def update_order_status(self, order_id: str, payload: OrderStatusUpdate) -> OrderOut:
        try:
            status = OrderStatus(payload.status)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid order status: {payload.status}",
                details={"allowed": allowed},
            ) from exc

        with transaction(self._session):
            order = self._orders.get(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            changes: Dict[str, Any] = {"status": status}
            if payload.tracking_number is not None:
                changes["tracking_number"] = payload.tracking_number or None
            self._orders.update(order, changes)

        logger.info("order_status_updated", order_id=order_id, status=status.value)
        return to_order_out(order)


__all__ = ["AdminService"]
