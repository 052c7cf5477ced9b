# storefront_api/routers/admin.py
"""
Back-office endpoints. Every route requires an admin session.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront_api.container import Container
from storefront_api.schemas.admin import (
    AdminProductOut,
    CategoryCreate,
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
from storefront_api.schemas.common import CreatedId, Envelope, ok
from storefront_api.schemas.orders import OrderOut
from storefront_api.services.admin_service import AdminService

from .deps import get_container, get_db, require_admin

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def get_admin_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db),
) -> AdminService:
    return container.admin_service(session=session)


# -----------------------------------------------------------------------------
# Products
# -----------------------------------------------------------------------------


@router.get("/products", response_model=Envelope[List[AdminProductOut]])
def list_products(service: AdminService = Depends(get_admin_service)) -> Envelope[List[AdminProductOut]]:
    return ok(service.list_products())


@router.post("/products", response_model=Envelope[CreatedId], status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, service: AdminService = Depends(get_admin_service)) -> Envelope[CreatedId]:
    return ok(service.create_product(payload))


@router.put("/products/{product_id}", response_model=Envelope[None])
def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: AdminService = Depends(get_admin_service),
) -> Envelope[None]:
    service.update_product(product_id, payload)
    return ok(message="Product updated successfully")


@router.delete("/products/{product_id}", response_model=Envelope[None])
def delete_product(product_id: str, service: AdminService = Depends(get_admin_service)) -> Envelope[None]:
    service.delete_product(product_id)
    return ok(message="Product deleted successfully")


# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------


@router.get("/categories", response_model=Envelope[List[CategoryOut]])
def list_categories(service: AdminService = Depends(get_admin_service)) -> Envelope[List[CategoryOut]]:
    return ok(service.list_categories())


@router.post("/categories", response_model=Envelope[CreatedId], status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, service: AdminService = Depends(get_admin_service)) -> Envelope[CreatedId]:
    return ok(service.create_category(payload))


@router.put("/categories/{category_id}", response_model=Envelope[None])
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    service: AdminService = Depends(get_admin_service),
) -> Envelope[None]:
    service.update_category(category_id, payload)
    return ok(message="Category updated successfully")


@router.delete("/categories/{category_id}", response_model=Envelope[None])
def delete_category(category_id: int, service: AdminService = Depends(get_admin_service)) -> Envelope[None]:
    service.delete_category(category_id)
    return ok(message="Category deleted successfully")


# -----------------------------------------------------------------------------
# Hero slides
# -----------------------------------------------------------------------------


@router.get("/hero-slides", response_model=Envelope[List[HeroSlideOut]])
def list_hero_slides(service: AdminService = Depends(get_admin_service)) -> Envelope[List[HeroSlideOut]]:
    return ok(service.list_hero_slides())


@router.post("/hero-slides", response_model=Envelope[CreatedId], status_code=status.HTTP_201_CREATED)
def create_hero_slide(payload: HeroSlideCreate, service: AdminService = Depends(get_admin_service)) -> Envelope[CreatedId]:
    return ok(service.create_hero_slide(payload))


@router.put("/hero-slides/{slide_id}", response_model=Envelope[None])
def update_hero_slide(
    slide_id: int,
    payload: HeroSlideUpdate,
    service: AdminService = Depends(get_admin_service),
) -> Envelope[None]:
    service.update_hero_slide(slide_id, payload)
    return ok(message="Hero slide updated successfully")


@router.delete("/hero-slides/{slide_id}", response_model=Envelope[None])
def delete_hero_slide(slide_id: int, service: AdminService = Depends(get_admin_service)) -> Envelope[None]:
    service.delete_hero_slide(slide_id)
    return ok(message="Hero slide deleted successfully")


# -----------------------------------------------------------------------------
# Promo banners
# -----------------------------------------------------------------------------


@router.get("/promo-banners", response_model=Envelope[List[PromoBannerOut]])
def list_promo_banners(service: AdminService = Depends(get_admin_service)) -> Envelope[List[PromoBannerOut]]:
    return ok(service.list_promo_banners())


@router.post("/promo-banners", response_model=Envelope[CreatedId], status_code=status.HTTP_201_CREATED)
def create_promo_banner(
    payload: PromoBannerCreate,
    service: AdminService = Depends(get_admin_service),
) -> Envelope[CreatedId]:
    return ok(service.create_promo_banner(payload))


@router.put("/promo-banners/{banner_id}", response_model=Envelope[None])
def update_promo_banner(
    banner_id: int,
    payload: PromoBannerUpdate,
    service: AdminService = Depends(get_admin_service),
) -> Envelope[None]:
    service.update_promo_banner(banner_id, payload)
    return ok(message="Promo banner updated successfully")


@router.delete("/promo-banners/{banner_id}", response_model=Envelope[None])
def delete_promo_banner(banner_id: int, service: AdminService = Depends(get_admin_service)) -> Envelope[None]:
    service.delete_promo_banner(banner_id)
    return ok(message="Promo banner deleted successfully")


# -----------------------------------------------------------------------------
# Customers & orders
# -----------------------------------------------------------------------------


@router.get("/customers", response_model=Envelope[List[CustomerOut]])
def list_customers(service: AdminService = Depends(get_admin_service)) -> Envelope[List[CustomerOut]]:
    return ok(service.list_customers())


@router.get("/orders", response_model=Envelope[List[OrderOut]])
def list_orders(service: AdminService = Depends(get_admin_service)) -> Envelope[List[OrderOut]]:
    return ok(service.list_orders())


@router.put("/orders/{order_id}/status", response_model=Envelope[OrderOut])
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    service: AdminService = Depends(get_admin_service),
) -> Envelope[OrderOut]:
    return ok(service.update_order_status(order_id, payload), message="Order status updated")
