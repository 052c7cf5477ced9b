# tests/services/test_order_service.py
import re
from itertools import cycle

import pytest

from storefront_api.db import db_session
from storefront_api.errors import InternalError
from storefront_api.schemas.auth import ShippingAddressInput
from storefront_api.schemas.orders import CreateOrderRequest, OrderItemInput
from storefront_api.services.order_service import (
    ORDER_CODE_ATTEMPTS,
    OrderService,
    generate_order_code,
)
from tests.conftest import register


def _request() -> CreateOrderRequest:
    return CreateOrderRequest(
        items=[OrderItemInput(product_id="p-1", name="Magic Mouse", price="79.999", quantity=1)],
        shipping_address=ShippingAddressInput(
            address="12 Ring Road", city="Accra", region="Greater Accra", zip_code="00233", country="Ghana"
        ),
    )


class TestOrderCodes:

    def test_format(self):
        for _ in range(50):
            assert re.fullmatch(r"AT-[ABCDEFGHJKLMNPQRSTUVWXYZ23456789]{8}", generate_order_code())

    def test_collision_retries_then_gives_up(self, client, container):
        """
        Scenario: The code factory keeps returning a code that is taken.
        Expected: A fresh code is used while one is available; after the
        attempt limit the service raises instead of looping.
        """
        # Arrange
        user_id = register(client)["id"]
        factory = container.session_factory()

        with db_session(factory) as session:
            first = OrderService(session, code_factory=lambda: "AT-AAAAAAAA").create_order(user_id, _request())

        calls = []

        def taken_then_free():
            calls.append(1)
            return "AT-AAAAAAAA" if len(calls) < 3 else "AT-BBBBBBBB"

        # Act
        with db_session(factory) as session:
            second = OrderService(session, code_factory=taken_then_free).create_order(user_id, _request())

        # Assert
        assert first.id == "AT-AAAAAAAA"
        assert second.id == "AT-BBBBBBBB"
        assert len(calls) == 3

        always_taken = cycle(["AT-AAAAAAAA", "AT-BBBBBBBB"])
        with db_session(factory) as session:
            service = OrderService(session, code_factory=lambda: next(always_taken))
            with pytest.raises(InternalError, match="Could not allocate an order code"):
                service.allocate_code()

    def test_prices_are_rounded_to_cents(self, client, container):
        user_id = register(client)["id"]

        with db_session(container.session_factory()) as session:
            created = OrderService(session).create_order(user_id, _request())

        assert str(created.total) == "80.00"
        assert ORDER_CODE_ATTEMPTS == 5
