# storefront_api/services/newsletter_service.py

from __future__ import annotations

from typing import Any, Dict, Optional

from storefront_api.errors import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from storefront_api.logging import get_logger
from storefront_api.schemas.newsletter import SubscribeRequest, UnsubscribeRequest
from .notifier import Notifier, NotifierError

logger = get_logger(__name__)

# Remote error code -> (exception, message shown to the client)
_REMOTE_ERRORS = {
    "ALREADY_SUBSCRIBED": (ConflictError, "You are already subscribed to our newsletter"),
    "VALIDATION_ERROR": (ValidationError, "Invalid email address"),
    "CONTACT_NOT_FOUND": (NotFoundError, "Email not found in our newsletter list"),
}


class NewsletterService:
    """
    Mailing-list subscriptions, delegated to the notification service.
    """

    def __init__(self, notifier: Notifier, service_slug: Optional[str]) -> None:
        self._notifier = notifier
        self._service_slug = service_slug

    def _slug(self) -> str:
        if not self._notifier.enabled:
            logger.error("newsletter_unavailable", reason="notifier_not_configured")
            raise ServiceUnavailableError("Newsletter service is currently unavailable")
        if not self._service_slug:
            logger.error("newsletter_unavailable", reason="service_slug_not_configured")
            raise ServiceUnavailableError("Newsletter service is not configured")
        return self._service_slug

    @staticmethod
    def _translate(exc: NotifierError) -> DomainError:
        mapped = _REMOTE_ERRORS.get(exc.code or "")
        if mapped is None:
            return InternalError("Newsletter request failed", details={"code": exc.code} if exc.code else None)
        error_cls, message = mapped
        return error_cls(message, details={"code": exc.code})

    def subscribe(self, payload: SubscribeRequest) -> Dict[str, Any]:
        slug = self._slug()
        try:
            result = self._notifier.subscribe_contact(
                slug,
                email=str(payload.email),
                first_name=payload.first_name or "Subscriber",
                last_name=payload.last_name or "",
            )
        except NotifierError as exc:
            logger.warning("newsletter_subscribe_failed", code=exc.code, error=exc.message)
            raise self._translate(exc) from exc
        logger.info("newsletter_subscribed")
        return result

    def unsubscribe(self, payload: UnsubscribeRequest) -> Dict[str, Any]:
        slug = self._slug()
        try:
            result = self._notifier.unsubscribe_contact(slug, str(payload.email))
        except NotifierError as exc:
            logger.warning("newsletter_unsubscribe_failed", code=exc.code, error=exc.message)
            raise self._translate(exc) from exc
        logger.info("newsletter_unsubscribed")
        return result


__all__ = ["NewsletterService"]
