"""
Image storage.

Uploads product and banner images to Supabase Storage buckets and
returns their public URLs.
"""

import logging
import mimetypes
import time
from typing import Optional

from ..common.constants import IMAGE_BUCKETS
from .api_client import SupabaseAPIClient

logger = logging.getLogger(__name__)


def _check_bucket(bucket: str) -> None:
    if bucket not in IMAGE_BUCKETS:
        raise ValueError(f"Unknown image bucket: {bucket} (expected one of {IMAGE_BUCKETS})")


def object_path_from_url(url: str) -> str:
    """The storage path is the last two URL segments: <user_id>/<file>."""
    return "/".join(url.rstrip("/").split("/")[-2:])


class ImageStore:
    """
    Upload/delete images in the product-images and banner-images buckets.

    Usage:
        images = ImageStore(client)
        url = images.upload_image("photo.png", data, "product-images", user_id)
        images.delete_image(url, "product-images")
    """

    def __init__(self, client: SupabaseAPIClient):
        self.client = client

    def get_public_url(self, bucket: str, path: str) -> str:
        return self.client.public_url(f"storage/v1/object/public/{bucket}/{path}")

    def upload_image(self, filename: str, data: bytes, bucket: str, user_id: str) -> Optional[str]:
        """
        Upload an image under <user_id>/<epoch-ms>.<ext>.

        Args:
            filename: Original file name (only the extension is kept)
            data: File contents
            bucket: "product-images" or "banner-images"
            user_id: Owner id, used as the folder

        Returns:
            Public URL of the stored object, or None on error
        """
        _check_bucket(bucket)

        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        path = f"{user_id}/{int(time.time() * 1000)}.{ext}"
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        result = self.client.request(
            "POST",
            f"storage/v1/object/{bucket}/{path}",
            content=data,
            headers={"Content-Type": content_type},
        )
        if result is None:
            logger.error("Error uploading image %s to %s", filename, bucket)
            return None

        logger.debug("Uploaded %s to %s/%s", filename, bucket, path)
        return self.get_public_url(bucket, path)

    def delete_image(self, url: str, bucket: str) -> bool:
        """Remove the object behind a public URL."""
        _check_bucket(bucket)

        path = object_path_from_url(url)
        result = self.client.request("DELETE", f"storage/v1/object/{bucket}", data={"prefixes": [path]})
        if result is None:
            logger.error("Error deleting image %s from %s", path, bucket)
            return False
        return True
