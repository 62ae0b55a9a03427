"""
Public shop page.

Renders a shop and its active products as a standalone HTML page. The
element ids are stable so a region can be captured by snapshot export.
"""

from html import escape
from typing import List, Sequence

from ..common.text_utils import format_price
from ..models import Product, Shop, active_products

PAGE_ID = "shop-page"
BANNER_ID = "shop-banner"
HEADER_ID = "shop-header"
GRID_ID = "product-grid"


def _product_card(product: Product) -> str:
    parts = [f'<div class="product-card" data-product-id="{escape(product.id)}">']
    if product.image_url:
        parts.append(f'<img src="{escape(product.image_url)}" alt="{escape(product.name)}" height="160">')
    parts.append(f'<h3>{escape(product.name)}</h3>')
    if product.description:
        parts.append(f'<p class="description">{escape(product.description)}</p>')
    parts.append(f'<p class="price">${format_price(product.price)}</p>')
    parts.append('</div>')
    return "".join(parts)


def render_shop_page(shop: Shop, products: Sequence[Product]) -> str:
    """
    Build the public HTML page of a shop.

    Args:
        shop: Shop to display
        products: Products in display order (inactive ones are hidden)

    Returns:
        Complete HTML document
    """
    body: List[str] = [f'<div id="{PAGE_ID}">']

    if shop.banner_image_url:
        body.append(
            f'<div id="{BANNER_ID}"><img src="{escape(shop.banner_image_url)}" '
            f'alt="{escape(shop.name)}" height="{shop.banner_height}"></div>'
        )

    body.append(f'<div id="{HEADER_ID}"><h1>{escape(shop.name)}</h1>')
    if shop.description:
        body.append(f'<p class="description">{escape(shop.description)}</p>')
    body.append('</div>')

    products = active_products(products)
    if products:
        body.append(f'<div id="{GRID_ID}" class="product-grid" data-columns="{shop.grid_columns}">')
        body.extend(_product_card(p) for p in products)
        body.append('</div>')
    else:
        body.append('<p class="empty">No products yet.</p>')

    body.append('</div>')

    return (
        '<!DOCTYPE html>\n'
        '<html><head><meta charset="utf-8">'
        f'<title>{escape(shop.name)}</title></head>\n'
        f'<body>{"".join(body)}</body></html>\n'
    )
