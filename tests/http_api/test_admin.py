# tests/http_api/test_admin.py
from fastapi import status

from tests.conftest import API, SHIPPING_ADDRESS, bearer, create_category, create_product


def _place_order(client, token):
    payload = {
        "items": [{"productId": "p-1", "name": "iPad Air", "price": 600, "quantity": 1}],
        "shippingAddress": SHIPPING_ADDRESS,
    }
    response = client.post(f"{API}/orders", json=payload, headers=bearer(token))
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]["id"]


class TestAdminAccess:

    def test_customer_gets_403(self, client, customer_token):
        response = client.get(f"{API}/admin/products", headers=bearer(customer_token))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"success": False, "message": "Not authorized as an admin"}

    def test_anonymous_gets_401(self, client):
        response = client.get(f"{API}/admin/orders")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestProducts:

    def test_create_by_category_name_and_list(self, client, admin_token):
        create_category(client, admin_token, "iPad")

        response = client.post(
            f"{API}/admin/products",
            json={
                "id": "client-chosen",
                "name": "iPad Air",
                "category": "iPad",
                "price": 599.99,
                "originalPrice": 649,
                "image": "/ipad.jpg",
                "grades": [{"name": "Excellent", "priceBump": 50}],
            },
            headers=bearer(admin_token),
        )

        assert response.status_code == status.HTTP_201_CREATED
        product_id = response.json()["data"]["id"]
        assert product_id != "client-chosen"

        listed = client.get(f"{API}/admin/products", headers=bearer(admin_token)).json()["data"]
        assert len(listed) == 1
        assert listed[0]["category"]["name"] == "iPad"
        assert listed[0]["price"] == 599.99
        assert listed[0]["grades"] == [{"name": "Excellent", "priceBump": 50}]
        assert "createdAt" in listed[0]

    def test_create_with_unknown_category(self, client, admin_token):
        response = client.post(
            f"{API}/admin/products",
            json={"name": "Ghost", "category": "Nope", "price": 1, "originalPrice": 1, "image": "/g.jpg"},
            headers=bearer(admin_token),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Unknown category: Nope"

    def test_partial_update_keeps_other_fields(self, client, admin_token):
        category = create_category(client, admin_token)
        product_id = create_product(client, admin_token, category, stock=5)

        response = client.put(
            f"{API}/admin/products/{product_id}", json={"price": 899}, headers=bearer(admin_token)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Product updated successfully"
        product = client.get(f"{API}/public/products/{product_id}").json()["data"]
        assert product["price"] == 899.0
        assert product["stock"] == 5
        assert product["name"] == "iPhone 15"

    def test_update_and_delete_missing_product(self, client, admin_token):
        update = client.put(f"{API}/admin/products/nope", json={"price": 1}, headers=bearer(admin_token))
        delete = client.delete(f"{API}/admin/products/nope", headers=bearer(admin_token))

        assert update.status_code == delete.status_code == status.HTTP_404_NOT_FOUND
        assert update.json()["message"] == "Product not found"

    def test_delete_product(self, client, admin_token):
        category = create_category(client, admin_token)
        product_id = create_product(client, admin_token, category)

        response = client.delete(f"{API}/admin/products/{product_id}", headers=bearer(admin_token))

        assert response.status_code == status.HTTP_200_OK
        assert client.get(f"{API}/public/products/{product_id}").status_code == status.HTTP_404_NOT_FOUND


class TestCategories:

    def test_delete_category_with_products_conflicts(self, client, admin_token):
        """
        Scenario: Category still referenced by a product.
        Expected: 409 and the category survives; deleting works once the
        product is gone.
        """
        # Arrange
        category = create_category(client, admin_token)
        product_id = create_product(client, admin_token, category)

        # Act
        blocked = client.delete(f"{API}/admin/categories/{category}", headers=bearer(admin_token))

        # Assert
        assert blocked.status_code == status.HTTP_409_CONFLICT
        assert blocked.json()["message"] == "Cannot delete category with products"

        client.delete(f"{API}/admin/products/{product_id}", headers=bearer(admin_token))
        allowed = client.delete(f"{API}/admin/categories/{category}", headers=bearer(admin_token))
        assert allowed.status_code == status.HTTP_200_OK
        assert allowed.json()["message"] == "Category deleted successfully"

    def test_duplicate_slug_conflicts(self, client, admin_token):
        create_category(client, admin_token, "iPhone", slug="iphone")

        response = client.post(
            f"{API}/admin/categories", json={"name": "Phones", "slug": "iphone"}, headers=bearer(admin_token)
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_admin_list_sorted_by_sort_order_descending(self, client, admin_token):
        create_category(client, admin_token, "Mac", sortOrder=1)
        create_category(client, admin_token, "Watch", sortOrder=5)

        data = client.get(f"{API}/admin/categories", headers=bearer(admin_token)).json()["data"]

        assert [c["name"] for c in data] == ["Watch", "Mac"]


class TestContent:

    def test_hero_slide_crud(self, client, admin_token):
        created = client.post(
            f"{API}/admin/hero-slides",
            json={"content": "<h1>New</h1>", "image": "/h.jpg", "cta": "Buy", "href": "/buy"},
            headers=bearer(admin_token),
        )
        slide_id = created.json()["data"]["id"]

        client.put(f"{API}/admin/hero-slides/{slide_id}", json={"cta": "Shop now"}, headers=bearer(admin_token))
        listed = client.get(f"{API}/admin/hero-slides", headers=bearer(admin_token)).json()["data"]
        deleted = client.delete(f"{API}/admin/hero-slides/{slide_id}", headers=bearer(admin_token))

        assert created.status_code == status.HTTP_201_CREATED
        assert listed[0]["cta"] == "Shop now"
        assert deleted.json()["message"] == "Hero slide deleted successfully"

    def test_missing_promo_banner(self, client, admin_token):
        response = client.delete(f"{API}/admin/promo-banners/999", headers=bearer(admin_token))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Promo banner not found"


class TestCustomersAndOrders:

    def test_customers_with_order_stats(self, client, admin_token, customer_token):
        _place_order(client, customer_token)
        _place_order(client, customer_token)

        data = client.get(f"{API}/admin/customers", headers=bearer(admin_token)).json()["data"]

        assert len(data) == 1
        customer = data[0]
        assert customer["name"] == "Ama Mensah"
        assert customer["orderCount"] == 2
        assert customer["totalSpent"] == 1200.0
        assert customer["shippingAddress"]["country"] == "Ghana"

    def test_update_order_status(self, client, admin_token, customer_token):
        order_id = _place_order(client, customer_token)

        response = client.put(
            f"{API}/admin/orders/{order_id}/status",
            json={"status": "Shipped", "trackingNumber": "GH123"},
            headers=bearer(admin_token),
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Order status updated"
        tracking = client.get(f"{API}/public/orders/{order_id}/tracking").json()["data"]
        assert tracking["status"] == "Shipped"
        assert tracking["trackingNumber"] == "GH123"

    def test_unknown_status_is_rejected(self, client, admin_token, customer_token):
        order_id = _place_order(client, customer_token)

        response = client.put(
            f"{API}/admin/orders/{order_id}/status", json={"status": "Lost"}, headers=bearer(admin_token)
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Invalid order status: Lost"

    def test_status_of_missing_order(self, client, admin_token):
        response = client.put(
            f"{API}/admin/orders/AT-NOTREAL/status", json={"status": "Delivered"}, headers=bearer(admin_token)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_all_orders(self, client, admin_token, customer_token):
        order_id = _place_order(client, customer_token)

        data = client.get(f"{API}/admin/orders", headers=bearer(admin_token)).json()["data"]

        assert [o["id"] for o in data] == [order_id]
        assert data[0]["customerEmail"] == "ama@example.com"
