"""
Supabase API Client

Shared client for the Supabase REST (PostgREST), Storage and Auth APIs.
Handles authentication headers, retries and error handling.
"""

import logging
import time
from typing import Any, Dict, Optional

import requests

from ..common.config_loader import BackendSettings

logger = logging.getLogger(__name__)


class SupabaseAPIClient:
    """
    Shared client for a Supabase project.

    Handles:
    - API key / bearer authentication
    - Retries on rate limiting and gateway errors
    - Error handling (errors are logged, callers get None)
    - Missing configuration (every request is skipped with a warning)

    Usage:
        client = SupabaseAPIClient(url="https://xyz.supabase.co", anon_key="eyJ...")

        # PostgREST request
        rows = client.rest_request("GET", "shops", params={"id": "eq.42"})

        # Storage / Auth request
        result = client.request("POST", "auth/v1/recover", data={"email": "a@b.co"})
    """

    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}

    def __init__(self, url: str = "", anon_key: str = ""):
        """
        Initialize the API client.

        Args:
            url: Project URL (e.g. https://xyz.supabase.co)
            anon_key: Public anon API key
        """
        self.url = (url or "").rstrip("/")
        self.anon_key = anon_key or ""

        self.session = requests.Session()
        self.session.headers.update({
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
        })

    @classmethod
    def from_settings(cls, settings: BackendSettings) -> "SupabaseAPIClient":
        return cls(url=settings.url, anon_key=settings.anon_key)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def is_configured(self) -> bool:
        """True when both the project URL and the API key are set."""
        return bool(self.url and self.anon_key)

    def public_url(self, path: str) -> str:
        return f"{self.url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        data: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: int = 30,
    ) -> Optional[Any]:
        """
        Make an API request with retries and error handling.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE)
            path: Path under the project URL (e.g., "rest/v1/shops")
            params: Query string parameters
            data: JSON body
            content: Raw body (file uploads); takes precedence over data
            headers: Extra headers for this request
            timeout: Request timeout in seconds

        Returns:
            Parsed JSON ({} for an empty body) or None on error
        """
        if method not in ("GET", "POST", "PATCH", "PUT", "DELETE"):
            raise ValueError(f"Unsupported method: {method}")

        if not self.is_configured():
            logger.warning("Supabase is not configured")
            return None

        url = self.public_url(path)
        kwargs: Dict[str, Any] = {"params": params, "headers": headers, "timeout": timeout}
        if content is not None:
            kwargs["data"] = content
        elif data is not None:
            kwargs["json"] = data

        for attempt in range(self.MAX_RETRIES):
            try:
                response = self.session.request(method, url, **kwargs)

                # Retry on rate limiting or gateway errors
                if response.status_code in self.RETRYABLE_STATUS_CODES:
                    retry_after = int(response.headers.get("Retry-After", 2 ** attempt))
                    logger.warning("HTTP %d on %s, retry %d/%d in %ds...",
                                   response.status_code, path, attempt + 1,
                                   self.MAX_RETRIES, retry_after)
                    time.sleep(retry_after)
                    continue

                # Check for errors
                if response.status_code >= 400:
                    logger.error("API Error %d on %s: %s", response.status_code, path,
                                 response.text[:200])
                    return None

                if not response.content:
                    return {}
                return response.json()

            except requests.exceptions.Timeout:
                logger.error("Request timeout: %s", path)
                return None
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                return None

        logger.error("Max retries (%d) exceeded for %s %s", self.MAX_RETRIES, method, path)
        return None

    def rest_request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        data: Any = None,
        prefer: Optional[str] = None,
    ) -> Optional[Any]:
        """
        Make a PostgREST request against a table.

        Args:
            method: HTTP method
            table: Table name (e.g., "products")
            params: PostgREST filters (e.g., {"shop_id": "eq.1", "order": "position.asc"})
            data: Row(s) to insert/update
            prefer: Prefer header (e.g., "return=representation")

        Returns:
            Response JSON (list of rows for selects) or None on error
        """
        headers = {"Prefer": prefer} if prefer else None
        return self.request(method, f"rest/v1/{table}", params=params, data=data, headers=headers)
