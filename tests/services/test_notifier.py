# tests/services/test_notifier.py
import json

import httpx
import pytest

from storefront_api.config import load_settings
from storefront_api.services.notifier import (
    DisabledNotifier,
    EmmisorNotifier,
    NotifierError,
    build_notifier,
)


def _notifier(handler) -> EmmisorNotifier:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return EmmisorNotifier(api_key="key-123", base_url="https://mail.example/", client=client)


class TestEmmisorNotifier:

    def test_send_email_request_shape(self):
        """
        Scenario: Sending one email.
        Expected: POST to the external API with the key header and no null fields.
        """
        # Arrange
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["key"] = request.headers["x-api-key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "id": "m-1"})

        # Act
        result = _notifier(handler).send_email(to="ama@example.com", subject="Hi", html="<p>Hi</p>")

        # Assert
        assert result == {"success": True, "id": "m-1"}
        assert seen["method"] == "POST"
        assert seen["url"] == "https://mail.example/api/v1/external/email/send"
        assert seen["key"] == "key-123"
        assert seen["body"] == {"to": "ama@example.com", "subject": "Hi", "html": "<p>Hi</p>"}

    def test_subscribe_uses_service_slug_and_camel_case(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"success": True})

        _notifier(handler).subscribe_contact("apple-treats", email="fan@example.com", first_name="Fan")

        assert seen["path"] == "/api/v1/external/apple-treats/contacts/subscribe"
        assert seen["body"] == {"email": "fan@example.com", "firstName": "Fan", "lastName": ""}

    def test_send_bulk_email_request_shape(self):
        """
        Scenario: One message with per-recipient variables.
        Expected: POST to send-bulk carrying every recipient, no null text.
        """
        # Arrange
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "sent": 2})

        recipients = [
            {"email": "ama@example.com", "variables": {"name": "Ama"}},
            {"email": "kofi@example.com", "variables": {"name": "Kofi"}},
        ]

        # Act
        result = _notifier(handler).send_bulk_email(subject="Sale", html="<p>{{name}}</p>", recipients=recipients)

        # Assert
        assert result == {"success": True, "sent": 2}
        assert seen["method"] == "POST"
        assert seen["path"] == "/api/v1/external/email/send-bulk"
        assert seen["body"] == {"subject": "Sale", "html": "<p>{{name}}</p>", "recipients": recipients}

    def test_send_email_to_list_targets_the_service_list(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True})

        _notifier(handler).send_email_to_list(
            "apple-treats", subject="News", html="<p>New stock</p>", text="New stock"
        )

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/v1/external/apple-treats/email/send"
        assert seen["body"] == {"subject": "News", "html": "<p>New stock</p>", "text": "New stock"}

    def test_get_list_info_is_a_plain_get(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["content"] = request.content
            seen["key"] = request.headers["x-api-key"]
            return httpx.Response(200, json={"success": True, "data": {"contacts": 12}})

        result = _notifier(handler).get_list_info("apple-treats")

        assert result == {"success": True, "data": {"contacts": 12}}
        assert seen["method"] == "GET"
        assert seen["path"] == "/api/v1/external/apple-treats/lists"
        assert seen["content"] == b""
        assert seen["key"] == "key-123"

    def test_empty_body_means_success(self):
        result = _notifier(lambda request: httpx.Response(204)).get_status()

        assert result == {"success": True}

    def test_non_json_success_body_is_returned_raw(self):
        result = _notifier(lambda request: httpx.Response(200, text="queued")).get_status()

        assert result == {"success": True, "rawResponse": "queued"}

    def test_error_body_carries_remote_code(self):
        def handler(request):
            return httpx.Response(409, json={"error": "Already subscribed", "code": "ALREADY_SUBSCRIBED"})

        with pytest.raises(NotifierError) as excinfo:
            _notifier(handler).subscribe_contact("apple-treats", email="fan@example.com", first_name="Fan")

        assert excinfo.value.code == "ALREADY_SUBSCRIBED"
        assert excinfo.value.status_code == 409
        assert excinfo.value.message == "Already subscribed"

    def test_non_json_error_body(self):
        with pytest.raises(NotifierError) as excinfo:
            _notifier(lambda request: httpx.Response(502, text="Bad Gateway")).get_status()

        assert excinfo.value.status_code == 502
        assert excinfo.value.code is None

    def test_transport_failure_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(NotifierError, match="refused"):
            _notifier(handler).get_status()


class TestBuildNotifier:

    def test_disabled_without_credentials(self):
        settings = load_settings(JWT_SECRET="s", DATABASE_URL="sqlite://", _env_file=None)

        notifier = build_notifier(settings)

        assert isinstance(notifier, DisabledNotifier)
        assert notifier.enabled is False
        with pytest.raises(NotifierError) as excinfo:
            notifier.send_email(to="a@example.com", subject="s", html="h")
        assert excinfo.value.code == "NOT_CONFIGURED"

    def test_enabled_with_credentials(self):
        settings = load_settings(
            JWT_SECRET="s",
            DATABASE_URL="sqlite://",
            EMMISOR_API_KEY="k",
            EMMISOR_URL="https://mail.example",
            _env_file=None,
        )

        notifier = build_notifier(settings)
        try:
            assert isinstance(notifier, EmmisorNotifier)
            assert notifier.enabled is True
        finally:
            notifier.close()
