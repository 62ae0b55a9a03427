"""
Data models for shops, products and export settings.

This module contains pure data classes with no business logic.
"""

from .shop import ExportOptions, Product, Shop, active_products

__all__ = ['Shop', 'Product', 'ExportOptions', 'active_products']
