"""Public storefront HTML view."""

from .shop_page import BANNER_ID, GRID_ID, HEADER_ID, PAGE_ID, render_shop_page

__all__ = ['render_shop_page', 'PAGE_ID', 'BANNER_ID', 'HEADER_ID', 'GRID_ID']
