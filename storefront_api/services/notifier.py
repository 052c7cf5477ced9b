# storefront_api/services/notifier.py
"""
Client for the Emmisor notification service (transactional email and
mailing-list contacts).

The notifier is optional. ``build_notifier`` returns a ``DisabledNotifier``
when the API key or base URL is missing; callers check ``enabled`` and
degrade instead of failing.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import httpx

from storefront_api.config import Settings
from storefront_api.logging import get_logger

logger = get_logger(__name__)

JsonDict = Dict[str, Any]


class NotifierError(Exception):
    """
    A failed call to the notification service.

    ``code`` is the machine-readable code from the remote error body
    (e.g. ``ALREADY_SUBSCRIBED``) when there is one.
    """

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


def _compact(body: Mapping[str, Any]) -> JsonDict:
    return {key: value for key, value in body.items() if value is not None}


class Notifier:
    """
    Interface shared by the real client and the disabled stand-in.
    """

    enabled: bool = False

    def send_email(
        self,
        *,
        to: Union[str, Sequence[str]],
        subject: str,
        html: str,
        text: Optional[str] = None,
        variables: Optional[Mapping[str, str]] = None,
    ) -> JsonDict:
        raise NotImplementedError

    def send_bulk_email(
        self,
        *,
        subject: str,
        html: str,
        recipients: Sequence[Mapping[str, Any]],
        text: Optional[str] = None,
    ) -> JsonDict:
        raise NotImplementedError

    def subscribe_contact(
        self,
        service_slug: str,
        *,
        email: str,
        first_name: str,
        last_name: str = "",
        phone: Optional[str] = None,
    ) -> JsonDict:
        raise NotImplementedError

    def unsubscribe_contact(self, service_slug: str, email: str) -> JsonDict:
        raise NotImplementedError

    def send_email_to_list(
        self,
        service_slug: str,
        *,
        subject: str,
        html: str,
        text: Optional[str] = None,
        variables: Optional[Mapping[str, str]] = None,
    ) -> JsonDict:
        raise NotImplementedError

    def get_list_info(self, service_slug: str) -> JsonDict:
        raise NotImplementedError

    def get_status(self) -> JsonDict:
        raise NotImplementedError

    def close(self) -> None:
        pass


class DisabledNotifier(Notifier):
    """Stands in when the notification service is not configured."""

    enabled = False

    def _unavailable(self, *_args: Any, **_kwargs: Any) -> JsonDict:
        raise NotifierError("Notification service is not configured", code="NOT_CONFIGURED")

    send_email = _unavailable  # type: ignore[assignment]
    send_bulk_email = _unavailable  # type: ignore[assignment]
    subscribe_contact = _unavailable  # type: ignore[assignment]
    unsubscribe_contact = _unavailable  # type: ignore[assignment]
    send_email_to_list = _unavailable  # type: ignore[assignment]
    get_list_info = _unavailable  # type: ignore[assignment]
    get_status = _unavailable  # type: ignore[assignment]


class EmmisorNotifier(Notifier):
    """
    Synchronous httpx client for ``<base_url>/api/v1/external``.

    One instance is shared by the whole process; ``httpx.Client`` is safe to
    use from the worker threads FastAPI runs sync endpoints in.
    """

    enabled = True

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = f"{base_url.rstrip('/')}/api/v1/external"
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {
            "Content-Type": "application/json",
            "x-api-key": api_key,
        }

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, endpoint: str, method: str = "GET", body: Optional[Mapping[str, Any]] = None) -> JsonDict:
        url = f"{self._base_url}{endpoint}"
        try:
            response = self._client.request(
                method,
                url,
                headers=self._headers,
                json=_compact(body) if body is not None else None,
            )
        except httpx.HTTPError as exc:
            logger.warning("emmisor_request_failed", method=method, endpoint=endpoint, error=str(exc))
            raise NotifierError(f"Emmisor request failed: {exc}") from exc

        text = response.text
        logger.info("emmisor_response", method=method, endpoint=endpoint, status_code=response.status_code)

        data: Any = None
        if text:
            try:
                data = response.json()
            except ValueError:
                if not response.is_success:
                    raise NotifierError(
                        f"Emmisor request failed: {response.status_code} - {text}",
                        status_code=response.status_code,
                    )
                return {"success": True, "rawResponse": text}

        if not response.is_success:
            payload = data if isinstance(data, dict) else {}
            raise NotifierError(
                payload.get("error") or f"Emmisor request failed: {response.status_code}",
                code=payload.get("code"),
                status_code=response.status_code,
            )

        if data is None:
            return {"success": True}
        return data

    # ------------------------------------------------------------------
    # Email
    # ------------------------------------------------------------------

    def send_email(
        self,
        *,
        to: Union[str, Sequence[str]],
        subject: str,
        html: str,
        text: Optional[str] = None,
        variables: Optional[Mapping[str, str]] = None,
    ) -> JsonDict:
        recipients: Union[str, List[str]] = to if isinstance(to, str) else list(to)
        return self._request(
            "/email/send",
            "POST",
            {"to": recipients, "subject": subject, "html": html, "text": text, "variables": variables},
        )

    def send_bulk_email(
        self,
        *,
        subject: str,
        html: str,
        recipients: Sequence[Mapping[str, Any]],
        text: Optional[str] = None,
    ) -> JsonDict:
        return self._request(
            "/email/send-bulk",
            "POST",
            {"subject": subject, "html": html, "text": text, "recipients": [dict(r) for r in recipients]},
        )

    # ------------------------------------------------------------------
    # Mailing-list contacts
    # ------------------------------------------------------------------

    def subscribe_contact(
        self,
        service_slug: str,
        *,
        email: str,
        first_name: str,
        last_name: str = "",
        phone: Optional[str] = None,
    ) -> JsonDict:
        return self._request(
            f"/{service_slug}/contacts/subscribe",
            "POST",
            {"email": email, "firstName": first_name, "lastName": last_name, "phone": phone},
        )

    def unsubscribe_contact(self, service_slug: str, email: str) -> JsonDict:
        return self._request(f"/{service_slug}/contacts/unsubscribe", "POST", {"email": email})

    def send_email_to_list(
        self,
        service_slug: str,
        *,
        subject: str,
        html: str,
        text: Optional[str] = None,
        variables: Optional[Mapping[str, str]] = None,
    ) -> JsonDict:
        return self._request(
            f"/{service_slug}/email/send",
            "POST",
            {"subject": subject, "html": html, "text": text, "variables": variables},
        )

    def get_list_info(self, service_slug: str) -> JsonDict:
        return self._request(f"/{service_slug}/lists")

    def get_status(self) -> JsonDict:
        return self._request("/status")

    def close(self) -> None:
        self._client.close()


def build_notifier(settings: Settings) -> Notifier:
    if not settings.notifier_enabled:
        logger.info("notifier_disabled")
        return DisabledNotifier()
    return EmmisorNotifier(
        api_key=settings.EMMISOR_API_KEY or "",
        base_url=settings.EMMISOR_URL or "",
        timeout=settings.EMMISOR_TIMEOUT,
    )


__all__ = [
    "NotifierError",
    "Notifier",
    "DisabledNotifier",
    "EmmisorNotifier",
    "build_notifier",
]
