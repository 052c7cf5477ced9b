# tests/http_api/test_catalog.py
import pytest
from fastapi import status

from storefront_api.db import db_session
from storefront_api.db.models import Product
from tests.conftest import API, bearer, create_category, create_product


@pytest.fixture
def catalog(client, admin_token):
    """
    Two categories and four products:

    - iPhone 15 (New, 999, featured)
    - iPhone 13 (Refurbished, 450, best seller)
    - MacBook Air (Refurbished, 899, new arrival)
    - Hidden Mac (New, 1500, inactive)
    """
    iphone = create_category(client, admin_token, "iPhone", sortOrder=2)
    mac = create_category(client, admin_token, "Mac", sortOrder=1)
    ids = {
        "iphone15": create_product(
            client,
            admin_token,
            iphone,
            name="iPhone 15",
            price=999,
            isFeatured=True,
            description="Dynamic Island and a 48MP camera",
            colors=[{"name": "Black", "value": "#000000"}],
            storageOptions=[{"size": "128GB", "priceBump": 0}, {"size": "256GB", "priceBump": 100}],
        ),
        "iphone13": create_product(
            client, admin_token, iphone, name="iPhone 13", price=450, condition="Refurbished", isBestSeller=True
        ),
        "macbook": create_product(
            client, admin_token, mac, name="MacBook Air", price=899, condition="Refurbished", isNew=True
        ),
        "hidden": create_product(client, admin_token, mac, name="Hidden Mac", price=1500, isActive=False),
    }
    return {"iphone": iphone, "mac": mac, **ids}


def _names(response):
    assert response.status_code == status.HTTP_200_OK, response.text
    return [p["name"] for p in response.json()["data"]]


class TestProductListing:

    def test_lists_only_active_products(self, client, catalog):
        names = _names(client.get(f"{API}/public/products"))

        assert sorted(names) == ["MacBook Air", "iPhone 13", "iPhone 15"]

    def test_filter_by_category_slug(self, client, catalog):
        assert sorted(_names(client.get(f"{API}/public/products", params={"category": "iphone"}))) == [
            "iPhone 13",
            "iPhone 15",
        ]
        assert len(_names(client.get(f"{API}/public/products", params={"category": "all"}))) == 3

    def test_search_is_case_insensitive_over_name_and_description(self, client, catalog):
        assert _names(client.get(f"{API}/public/products", params={"q": "MACBOOK"})) == ["MacBook Air"]
        assert _names(client.get(f"{API}/public/products", params={"q": "dynamic island"})) == ["iPhone 15"]

    def test_filters_combine(self, client, catalog):
        """
        Scenario: Condition list plus a price window.
        Expected: Only products matching every filter.
        """
        response = client.get(
            f"{API}/public/products",
            params={"condition": "Refurbished", "minPrice": 500, "maxPrice": 1000},
        )

        assert _names(response) == ["MacBook Air"]

    def test_sort_by_price(self, client, catalog):
        low = _names(client.get(f"{API}/public/products", params={"sort": "price-low"}))
        high = _names(client.get(f"{API}/public/products", params={"sort": "price-high"}))

        assert low == ["iPhone 13", "MacBook Air", "iPhone 15"]
        assert high == list(reversed(low))

    def test_sort_a_z(self, client, catalog):
        assert _names(client.get(f"{API}/public/products", params={"sort": "a-z"})) == [
            "MacBook Air",
            "iPhone 13",
            "iPhone 15",
        ]

    def test_invalid_condition_is_rejected(self, client, catalog):
        response = client.get(f"{API}/public/products", params={"condition": "Broken"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Invalid condition: Broken"

    def test_product_shape(self, client, catalog):
        data = client.get(f"{API}/public/products", params={"q": "iPhone 15"}).json()["data"]

        product = data[0]
        assert product["category"] == "iPhone"
        assert product["categorySlug"] == "iphone"
        assert product["price"] == 999.0
        assert product["originalPrice"] == 1099.0
        assert product["colors"] == [{"name": "Black", "value": "#000000"}]
        assert product["storageOptions"][1] == {"size": "256GB", "priceBump": 100}
        assert product["memoryOptions"] == []
        assert product["grades"] == []


class TestProductDetail:

    def test_detail(self, client, catalog):
        response = client.get(f"{API}/public/products/{catalog['iphone15']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["name"] == "iPhone 15"

    def test_detail_of_inactive_product_is_still_served(self, client, catalog):
        response = client.get(f"{API}/public/products/{catalog['hidden']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["isActive"] is False

    def test_unknown_product(self, client, catalog):
        response = client.get(f"{API}/public/products/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"success": False, "message": "Product not found"}

    def test_malformed_variant_json_reads_as_empty_list(self, client, container, catalog):
        """
        Scenario: A variant column holds text that is not a JSON array.
        Expected: The product is still served, with that field empty.
        """
        # Arrange
        with db_session(container.session_factory()) as session:
            product = session.get(Product, catalog["iphone15"])
            product.colors = "{not json"
            product.grades = '{"name": "Excellent"}'

        # Act
        response = client.get(f"{API}/public/products/{catalog['iphone15']}")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["colors"] == []
        assert data["grades"] == []
        assert len(data["storageOptions"]) == 2


class TestCategoriesAndLandingPage:

    def test_categories_ordered_by_sort_order(self, client, catalog):
        response = client.get(f"{API}/public/categories")

        assert response.status_code == status.HTTP_200_OK
        assert [c["slug"] for c in response.json()["data"]] == ["mac", "iphone"]

    def test_landing_page_sections(self, client, admin_token, catalog):
        # Arrange
        client.post(
            f"{API}/admin/hero-slides",
            json={"content": "<h1>Hi</h1>", "image": "/a.jpg", "cta": "Shop", "href": "/shop", "sortOrder": 2},
            headers=bearer(admin_token),
        )
        client.post(
            f"{API}/admin/hero-slides",
            json={"content": "<h1>Off</h1>", "image": "/b.jpg", "cta": "Shop", "href": "/shop", "isActive": False},
            headers=bearer(admin_token),
        )
        client.post(
            f"{API}/admin/promo-banners",
            json={"content": "Deals", "ctaText": "Go", "ctaLink": "/deals", "image": "/c.jpg"},
            headers=bearer(admin_token),
        )

        # Act
        response = client.get(f"{API}/public/landing-page")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert [s["content"] for s in data["heroSlides"]] == ["<h1>Hi</h1>"]
        assert len(data["products"]) == 3
        assert [p["name"] for p in data["featuredProducts"]] == ["iPhone 15"]
        assert [p["name"] for p in data["bestSellers"]] == ["iPhone 13"]
        assert [p["name"] for p in data["latestProducts"]] == ["MacBook Air"]
        assert data["promoBanners"][0]["bgColor"] == "#f5f5f7"

    def test_landing_page_sections_are_capped(self, client, admin_token):
        category = create_category(client, admin_token, "Watch")
        for i in range(6):
            create_product(client, admin_token, category, name=f"Watch {i}", isFeatured=True)

        data = client.get(f"{API}/public/landing-page").json()["data"]

        assert len(data["products"]) == 6
        assert len(data["featuredProducts"]) == 4
        assert data["heroSlides"] == []
