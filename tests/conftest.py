"""Shared test fixtures."""

from datetime import date
from decimal import Decimal

import pytest
from PIL import Image

from storefront.models import Product, Shop

BANNER_URL = "https://cdn.example.com/banner.jpg"
PRODUCT_IMAGE_URL = "https://cdn.example.com/product.jpg"
BROKEN_URL = "https://cdn.example.com/broken.jpg"


class StubImageLoader:
    """Image loader serving in-memory images; unknown sources fail (None)."""

    def __init__(self, images=None):
        self.images = images or {}
        self.requested = []

    def load(self, source):
        self.requested.append(source)
        return self.images.get(source)

    def close(self):
        pass


@pytest.fixture
def frozen_date():
    return date(2026, 10, 17)


@pytest.fixture
def red_image():
    return Image.new("RGB", (60, 30), (200, 0, 0))


@pytest.fixture
def image_loader(red_image):
    """Loader that knows the banner and product image URLs."""
    return StubImageLoader({BANNER_URL: red_image, PRODUCT_IMAGE_URL: red_image})


@pytest.fixture
def empty_loader():
    """Loader for which every image fails."""
    return StubImageLoader()


@pytest.fixture
def acme_shop():
    return Shop(id="shop-1", user_id="user-1", name="Acme", grid_columns=3)


@pytest.fixture
def described_shop():
    return Shop(
        id="shop-2",
        user_id="user-2",
        name="Corner Bakery",
        description="Fresh bread and pastries baked every morning in small batches.",
        banner_image_url=BANNER_URL,
        banner_height=240,
        grid_columns=4,
    )


@pytest.fixture
def make_product():
    """Factory: make_product("A", 0, price="9.50", image_url=...)."""
    def _make(name, position=0, price="10.00", **kwargs):
        return Product(
            id=kwargs.pop("id", f"prod-{name.lower().replace(' ', '-')}"),
            shop_id=kwargs.pop("shop_id", "shop-1"),
            name=name,
            price=Decimal(str(price)),
            position=position,
            **kwargs,
        )
    return _make


@pytest.fixture
def acme_products(make_product):
    return [make_product(name, i) for i, name in enumerate(["A", "B", "C", "D"])]
