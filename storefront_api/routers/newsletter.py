# storefront_api/routers/newsletter.py

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from storefront_api.container import Container
from storefront_api.schemas.common import Envelope, ok
from storefront_api.schemas.newsletter import SubscribeRequest, UnsubscribeRequest
from storefront_api.services.newsletter_service import NewsletterService

from .deps import get_container

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


def get_newsletter_service(container: Container = Depends(get_container)) -> NewsletterService:
    return container.newsletter_service()


@router.post(
    "/subscribe",
    response_model=Envelope[Dict[str, Any]],
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe an email address to the newsletter",
)
def subscribe(
    payload: SubscribeRequest,
    service: NewsletterService = Depends(get_newsletter_service),
) -> Envelope[Dict[str, Any]]:
    result = service.subscribe(payload)
    return ok(result, message="Successfully subscribed to newsletter!")


@router.post(
    "/unsubscribe",
    response_model=Envelope[Dict[str, Any]],
    summary="Remove an email address from the newsletter",
)
def unsubscribe(
    payload: UnsubscribeRequest,
    service: NewsletterService = Depends(get_newsletter_service),
) -> Envelope[Dict[str, Any]]:
    result = service.unsubscribe(payload)
    return ok(result, message="Successfully unsubscribed from newsletter")
