# storefront_api/routers/public.py

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront_api.container import Container
from storefront_api.schemas.catalog import CategoryOut, LandingPage, ProductOut
from storefront_api.schemas.common import Envelope, ok
from storefront_api.schemas.orders import OrderTracking
from storefront_api.services.catalog_service import CatalogService, ProductFilter
from storefront_api.services.order_service import OrderService

from .deps import get_container, get_db

router = APIRouter(prefix="/public", tags=["public"])


def get_catalog_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db),
) -> CatalogService:
    return container.catalog_service(session=session)


def get_order_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db),
) -> OrderService:
    return container.order_service(session=session)


@router.get(
    "/landing-page",
    response_model=Envelope[LandingPage],
    summary="Landing page content",
    description="Active hero slides, active products with featured / best-seller / newest sections, and active promo banners.",
)
def landing_page(service: CatalogService = Depends(get_catalog_service)) -> Envelope[LandingPage]:
    return ok(service.get_landing_page())


@router.get("/categories", response_model=Envelope[List[CategoryOut]], summary="List categories")
def list_categories(service: CatalogService = Depends(get_catalog_service)) -> Envelope[List[CategoryOut]]:
    return ok(service.list_categories())


@router.get(
    "/products",
    response_model=Envelope[List[ProductOut]],
    summary="List active products",
)
def list_products(
    *,
    service: CatalogService = Depends(get_catalog_service),
    category: Optional[str] = Query(None, description="Category slug, or 'all'."),
    q: Optional[str] = Query(None, description="Case-insensitive search over name and description."),
    condition: Optional[str] = Query(None, description="Comma-separated conditions, e.g. 'New,Refurbished'."),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    sort: Optional[str] = Query(None, description="price-low, price-high, a-z or newest (default)."),
) -> Envelope[List[ProductOut]]:
    product_filter = ProductFilter.from_query(
        category=category,
        q=q,
        condition=condition,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
    )
    return ok(service.list_products(product_filter))


@router.get("/products/{product_id}", response_model=Envelope[ProductOut], summary="Product detail")
def get_product(product_id: str, service: CatalogService = Depends(get_catalog_service)) -> Envelope[ProductOut]:
    return ok(service.get_product(product_id))


@router.get(
    "/orders/{order_id}/tracking",
    response_model=Envelope[OrderTracking],
    summary="Track an order by its code",
    description="No login needed: the order code is the credential, so only status fields are returned.",
)
def track_order(order_id: str, service: OrderService = Depends(get_order_service)) -> Envelope[OrderTracking]:
    return ok(service.get_tracking(order_id))
