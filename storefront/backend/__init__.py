"""
Supabase backend clients.

Modules:
    api_client - Shared HTTP client (REST, Storage, Auth)
    records    - Shop and product record stores
    storage    - Image upload/delete in storage buckets
    auth       - Sign-up / sign-in / password reset
"""

from .api_client import SupabaseAPIClient
from .auth import AuthClient, validate_metadata
from .records import ProductStore, ShopStore
from .storage import ImageStore

__all__ = [
    'SupabaseAPIClient',
    'ShopStore',
    'ProductStore',
    'ImageStore',
    'AuthClient',
    'validate_metadata',
]
