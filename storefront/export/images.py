"""
Image Loader

Fetches and decodes images for PDF and snapshot rendering.
A failed load is never fatal: the caller gets None and carries on.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional

import requests
from PIL import Image

from ..common.constants import DEFAULT_IMAGE_TIMEOUT

logger = logging.getLogger(__name__)


class ImageLoader:
    """
    Loads remote (http/https) or local images into RGB Pillow images.

    Usage:
        loader = ImageLoader(timeout=10)
        image = loader.load("https://cdn.example.com/banner.jpg")
        if image is None:
            ...  # skip it
    """

    def __init__(self, timeout: float = DEFAULT_IMAGE_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _read_bytes(self, source: str) -> bytes:
        if source.startswith(("http://", "https://")):
            response = self.session.get(source, timeout=self.timeout)
            response.raise_for_status()
            return response.content
        return Path(source).read_bytes()

    def load(self, source: str) -> Optional[Image.Image]:
        """
        Load and decode an image.

        Args:
            source: URL or local file path

        Returns:
            Decoded RGB image, or None if it could not be fetched or decoded
        """
        try:
            data = self._read_bytes(source)
            with Image.open(BytesIO(data)) as img:
                img.load()
                return img.convert("RGB")
        except requests.exceptions.RequestException as e:
            logger.warning("Could not fetch image %s: %s", source, e)
        except OSError as e:
            # Missing local file or undecodable data (UnidentifiedImageError)
            logger.warning("Could not decode image %s: %s", source, e)
        except Image.DecompressionBombError as e:
            logger.warning("Image too large, skipped %s: %s", source, e)
        except ValueError as e:
            # Unusable path, e.g. an embedded NUL byte
            logger.warning("Could not read image %s: %s", source, e)
        return None
