"""Tests for storefront/backend/records.py"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from storefront.backend.records import ProductStore, ShopStore

SHOP_ROW = {
    "id": "shop-1",
    "user_id": "user-1",
    "name": "Acme",
    "description": None,
    "banner_image_url": None,
    "banner_height": 200,
    "grid_columns": 4,
    "created_at": "2026-10-01T10:00:00Z",
    "updated_at": "2026-10-02T10:00:00Z",
}


def product_row(pid, position, is_active=True, price=9.5):
    return {
        "id": pid,
        "shop_id": "shop-1",
        "name": pid.upper(),
        "price": price,
        "position": position,
        "is_active": is_active,
    }


@pytest.fixture
def client():
    mock = MagicMock()
    mock.is_configured.return_value = True
    return mock


class TestShopStore:
    def test_get_shop_by_id(self, client):
        client.rest_request.return_value = [SHOP_ROW]

        shop = ShopStore(client).get_shop_by_id("shop-1")

        assert shop.name == "Acme"
        assert shop.grid_columns == 4
        client.rest_request.assert_called_once_with(
            "GET", "shops", params={"id": "eq.shop-1", "select": "*", "limit": "1"},
        )

    def test_get_user_shop(self, client):
        client.rest_request.return_value = [SHOP_ROW]

        shop = ShopStore(client).get_user_shop("user-1")

        assert shop.id == "shop-1"
        assert client.rest_request.call_args.kwargs["params"]["user_id"] == "eq.user-1"

    def test_user_without_shop(self, client):
        client.rest_request.return_value = []
        assert ShopStore(client).get_user_shop("user-2") is None

    def test_fetch_error_returns_none(self, client):
        client.rest_request.return_value = None
        assert ShopStore(client).get_shop_by_id("shop-1") is None

    def test_create_shop(self, client):
        client.rest_request.return_value = [SHOP_ROW]
        data = {"user_id": "user-1", "name": "Acme"}

        shop = ShopStore(client).create_shop(data)

        assert shop.id == "shop-1"
        client.rest_request.assert_called_once_with(
            "POST", "shops", data=data, prefer="return=representation",
        )

    def test_create_shop_error(self, client):
        client.rest_request.return_value = None
        assert ShopStore(client).create_shop({"user_id": "user-1", "name": "Acme"}) is None

    def test_update_shop(self, client):
        client.rest_request.return_value = [{**SHOP_ROW, "grid_columns": 5}]

        shop = ShopStore(client).update_shop("shop-1", {"grid_columns": 5})

        assert shop.grid_columns == 5
        client.rest_request.assert_called_once_with(
            "PATCH", "shops", params={"id": "eq.shop-1"}, data={"grid_columns": 5},
            prefer="return=representation",
        )

    def test_update_missing_shop(self, client):
        client.rest_request.return_value = []
        assert ShopStore(client).update_shop("nope", {"name": "X"}) is None

    def test_delete_shop(self, client):
        client.rest_request.return_value = {}
        assert ShopStore(client).delete_shop("shop-1") is True

    def test_delete_shop_error(self, client):
        client.rest_request.return_value = None
        assert ShopStore(client).delete_shop("shop-1") is False


class TestProductStore:
    def test_lists_active_in_position_order(self, client):
        client.rest_request.return_value = [product_row("a", 0), product_row("b", 1)]

        products = ProductStore(client).get_shop_products_public("shop-1")

        assert [p.id for p in products] == ["a", "b"]
        assert products[0].price == Decimal("9.5")
        client.rest_request.assert_called_once_with("GET", "products", params={
            "select": "*",
            "shop_id": "eq.shop-1",
            "is_active": "eq.true",
            "order": "position.asc",
        })

    def test_inactive_rows_are_dropped(self, client):
        client.rest_request.return_value = [product_row("a", 0), product_row("b", 1, is_active=False)]
        assert [p.id for p in ProductStore(client).get_shop_products("shop-1")] == ["a"]

    def test_invalid_rows_are_skipped(self, client, caplog):
        client.rest_request.return_value = [product_row("a", 0, price="NaN"), product_row("b", 1)]

        with caplog.at_level("WARNING", logger="storefront.backend.records"):
            products = ProductStore(client).get_shop_products("shop-1")

        assert [p.id for p in products] == ["b"]
        assert "Skipping invalid product a" in caplog.text

    def test_fetch_error_returns_empty_list(self, client):
        client.rest_request.return_value = None
        assert ProductStore(client).get_shop_products("shop-1") == []

    def test_create_product(self, client):
        client.rest_request.return_value = [product_row("a", 0)]

        product = ProductStore(client).create_product({"shop_id": "shop-1", "name": "A", "price": 9.5})

        assert product.id == "a"
        assert client.rest_request.call_args.kwargs["prefer"] == "return=representation"

    def test_update_product(self, client):
        client.rest_request.return_value = [product_row("a", 0, price=12)]

        product = ProductStore(client).update_product("a", {"price": 12})

        assert product.price == Decimal("12")
        assert client.rest_request.call_args.kwargs["params"] == {"id": "eq.a"}

    def test_update_product_error(self, client):
        client.rest_request.return_value = None
        assert ProductStore(client).update_product("a", {"price": 12}) is None

    def test_delete_product(self, client):
        client.rest_request.return_value = {}
        assert ProductStore(client).delete_product("a") is True
        client.rest_request.assert_called_once_with("DELETE", "products", params={"id": "eq.a"})

    def test_reorder_products_single_upsert(self, client):
        client.rest_request.return_value = {}

        ok = ProductStore(client).reorder_products([("b", 0), ("a", 1)])

        assert ok is True
        client.rest_request.assert_called_once_with(
            "POST", "products",
            data=[{"id": "b", "position": 0}, {"id": "a", "position": 1}],
            prefer="resolution=merge-duplicates",
        )

    def test_reorder_nothing(self, client):
        assert ProductStore(client).reorder_products([]) is True
        client.rest_request.assert_not_called()

    def test_reorder_error(self, client):
        client.rest_request.return_value = None
        assert ProductStore(client).reorder_products([("a", 0)]) is False
