"""
Shop and product record stores.

Typed accessors over the `shops` and `products` tables. Errors and a
missing backend configuration degrade to None / [] / False; use
client.is_configured() to tell "not configured" apart from "no data".
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models import Product, Shop, active_products
from .api_client import SupabaseAPIClient

logger = logging.getLogger(__name__)

RETURN_ROWS = "return=representation"


def _first_row(result: Optional[Any]) -> Optional[Dict[str, Any]]:
    if isinstance(result, list):
        return result[0] if result else None
    if isinstance(result, dict) and result:
        return result
    return None


class ShopStore:
    """
    CRUD for shops.

    Usage:
        shops = ShopStore(client)
        shop = shops.get_user_shop(user_id)
        shops.update_shop(shop.id, {"grid_columns": 4})
    """

    TABLE = "shops"

    def __init__(self, client: SupabaseAPIClient):
        self.client = client

    def _single(self, params: Dict[str, str], action: str) -> Optional[Shop]:
        result = self.client.rest_request("GET", self.TABLE, params={**params, "select": "*", "limit": "1"})
        if result is None:
            logger.error("Error fetching shop (%s)", action)
            return None
        row = _first_row(result)
        return Shop.from_record(row) if row else None

    def get_shop_by_id(self, shop_id: str) -> Optional[Shop]:
        """Public lookup by shop id."""
        return self._single({"id": f"eq.{shop_id}"}, f"id={shop_id}")

    def get_user_shop(self, user_id: str) -> Optional[Shop]:
        """The shop owned by a user; None if the user has none yet."""
        return self._single({"user_id": f"eq.{user_id}"}, f"user_id={user_id}")

    def create_shop(self, shop_data: Dict[str, Any]) -> Optional[Shop]:
        """
        Insert a shop.

        Args:
            shop_data: Columns without id/timestamps (e.g. Shop.to_record())

        Returns:
            Created shop or None on error
        """
        row = _first_row(self.client.rest_request("POST", self.TABLE, data=shop_data, prefer=RETURN_ROWS))
        if row is None:
            logger.error("Error creating shop for user %s", shop_data.get("user_id"))
            return None
        logger.info("Created shop %s", row.get("id"))
        return Shop.from_record(row)

    def update_shop(self, shop_id: str, updates: Dict[str, Any]) -> Optional[Shop]:
        """Apply a partial update; returns the updated shop or None."""
        row = _first_row(self.client.rest_request(
            "PATCH", self.TABLE, params={"id": f"eq.{shop_id}"}, data=updates, prefer=RETURN_ROWS,
        ))
        if row is None:
            logger.error("Error updating shop %s", shop_id)
            return None
        return Shop.from_record(row)

    def delete_shop(self, shop_id: str) -> bool:
        result = self.client.rest_request("DELETE", self.TABLE, params={"id": f"eq.{shop_id}"})
        if result is None:
            logger.error("Error deleting shop %s", shop_id)
            return False
        return True


class ProductStore:
    """
    CRUD and ordering for products.

    Listings only ever contain active products, ordered by position.
    """

    TABLE = "products"

    def __init__(self, client: SupabaseAPIClient):
        self.client = client

    def _list(self, shop_id: str) -> List[Product]:
        result = self.client.rest_request("GET", self.TABLE, params={
            "select": "*",
            "shop_id": f"eq.{shop_id}",
            "is_active": "eq.true",
            "order": "position.asc",
        })
        if result is None:
            logger.error("Error fetching products for shop %s", shop_id)
            return []

        products = []
        for row in result:
            try:
                products.append(Product.from_record(row))
            except ValueError as e:
                logger.warning("Skipping invalid product %s: %s", row.get("id"), e)
        return active_products(products)

    def get_shop_products_public(self, shop_id: str) -> List[Product]:
        """Active products of a shop for the public view."""
        return self._list(shop_id)

    def get_shop_products(self, shop_id: str) -> List[Product]:
        """Active products of a shop for the owner's editor."""
        return self._list(shop_id)

    def create_product(self, product_data: Dict[str, Any]) -> Optional[Product]:
        row = _first_row(self.client.rest_request("POST", self.TABLE, data=product_data, prefer=RETURN_ROWS))
        if row is None:
            logger.error("Error creating product in shop %s", product_data.get("shop_id"))
            return None
        return Product.from_record(row)

    def update_product(self, product_id: str, updates: Dict[str, Any]) -> Optional[Product]:
        row = _first_row(self.client.rest_request(
            "PATCH", self.TABLE, params={"id": f"eq.{product_id}"}, data=updates, prefer=RETURN_ROWS,
        ))
        if row is None:
            logger.error("Error updating product %s", product_id)
            return None
        return Product.from_record(row)

    def delete_product(self, product_id: str) -> bool:
        result = self.client.rest_request("DELETE", self.TABLE, params={"id": f"eq.{product_id}"})
        if result is None:
            logger.error("Error deleting product %s", product_id)
            return False
        return True

    def reorder_products(self, positions: Iterable[Tuple[str, int]]) -> bool:
        """
        Persist new positions in a single upsert.

        Args:
            positions: (product_id, position) pairs

        Returns:
            True on success
        """
        rows = [{"id": product_id, "position": position} for product_id, position in positions]
        if not rows:
            return True

        result = self.client.rest_request(
            "POST", self.TABLE, data=rows, prefer="resolution=merge-duplicates",
        )
        if result is None:
            logger.error("Error reordering %d products", len(rows))
            return False
        return True
