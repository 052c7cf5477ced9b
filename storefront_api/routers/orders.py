# storefront_api/routers/orders.py

from __future__ import annotations

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from storefront_api.container import Container
from storefront_api.schemas.common import Envelope, ok
from storefront_api.schemas.orders import CreateOrderRequest, OrderCreated, OrderOut
from storefront_api.security import SessionClaims
from storefront_api.services.notifier import Notifier
from storefront_api.services.order_service import OrderService, send_order_confirmation

from .deps import get_container, get_db, require_user

router = APIRouter(prefix="/orders", tags=["orders"], dependencies=[Depends(require_user)])


def get_order_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db),
) -> OrderService:
    return container.order_service(session=session)


def get_notifier(container: Container = Depends(get_container)) -> Notifier:
    return container.notifier()


@router.post(
    "",
    response_model=Envelope[OrderCreated],
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
)
def create_order(
    payload: CreateOrderRequest,
    background_tasks: BackgroundTasks,
    claims: SessionClaims = Depends(require_user),
    service: OrderService = Depends(get_order_service),
    notifier: Notifier = Depends(get_notifier),
) -> Envelope[OrderCreated]:
    created = service.create_order(claims.user_id, payload)

    if notifier.enabled:
        email = service.prepare_confirmation(created.id)
        if email is not None:
            background_tasks.add_task(send_order_confirmation, notifier, email)

    return ok(created)


@router.get("/my", response_model=Envelope[List[OrderOut]], summary="My orders, newest first")
def list_my_orders(
    claims: SessionClaims = Depends(require_user),
    service: OrderService = Depends(get_order_service),
) -> Envelope[List[OrderOut]]:
    return ok(service.list_for_customer(claims.user_id))


@router.get("/{order_id}", response_model=Envelope[OrderOut], summary="One of my orders")
def get_my_order(
    order_id: str,
    claims: SessionClaims = Depends(require_user),
    service: OrderService = Depends(get_order_service),
) -> Envelope[OrderOut]:
    return ok(service.get_for_customer(claims.user_id, order_id))
