"""
Identity client.

Thin wrapper over the Supabase Auth (GoTrue) endpoints used by the
storefront: sign-up, password sign-in, sign-out, password reset.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from ..common.text_utils import is_valid_email
from .api_client import SupabaseAPIClient

logger = logging.getLogger(__name__)

MetadataValue = Union[str, int, float, bool, None]
PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def validate_metadata(metadata: Optional[Mapping[str, Any]]) -> Dict[str, MetadataValue]:
    """
    Check sign-up metadata: string keys, primitive values only.

    Raises:
        ValueError: On a non-string key or a nested/non-primitive value
    """
    if metadata is None:
        return {}

    validated: Dict[str, MetadataValue] = {}
    for key, value in metadata.items():
        if not isinstance(key, str) or not key:
            raise ValueError(f"Metadata keys must be non-empty strings, got {key!r}")
        if not isinstance(value, PRIMITIVE_TYPES):
            raise ValueError(
                f"Metadata value for '{key}' must be a string, number, boolean or null, "
                f"got {type(value).__name__}"
            )
        validated[key] = value
    return validated


def _bearer(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


class AuthClient:
    """
    Supabase Auth operations.

    Usage:
        auth = AuthClient(client)
        session = auth.sign_in("owner@example.com", "secret")
        user = auth.get_user(session["access_token"])
    """

    def __init__(self, client: SupabaseAPIClient):
        self.client = client

    def sign_up(self, email: str, password: str, metadata: Optional[Mapping[str, Any]] = None) -> Optional[Dict]:
        """Register a user; metadata is stored as user_metadata."""
        if not is_valid_email(email):
            raise ValueError(f"Invalid email address: {email}")
        payload = {"email": email, "password": password, "data": validate_metadata(metadata)}
        return self.client.request("POST", "auth/v1/signup", data=payload)

    def sign_in(self, email: str, password: str) -> Optional[Dict]:
        """Password sign-in; returns the session (access_token, user, ...)."""
        return self.client.request(
            "POST", "auth/v1/token", params={"grant_type": "password"},
            data={"email": email, "password": password},
        )

    def sign_out(self, access_token: str) -> bool:
        return self.client.request("POST", "auth/v1/logout", headers=_bearer(access_token)) is not None

    def reset_password(self, email: str, redirect_to: Optional[str] = None) -> bool:
        """Send a password recovery email."""
        params = {"redirect_to": redirect_to} if redirect_to else None
        result = self.client.request("POST", "auth/v1/recover", params=params, data={"email": email})
        return result is not None

    def update_password(self, access_token: str, password: str) -> Optional[Dict]:
        return self.client.request("PUT", "auth/v1/user", data={"password": password},
                                   headers=_bearer(access_token))

    def get_user(self, access_token: str) -> Optional[Dict]:
        return self.client.request("GET", "auth/v1/user", headers=_bearer(access_token))
