# src/storefront/services/media.py
"""
Image upload through the Cloudinary REST API.

When no credentials are configured the service never calls out; product
creation falls back to the placeholder images below.
"""

import hashlib
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx

from storefront.core.config import MediaConfig
from storefront.core.logging import color_palette, log

PLACEHOLDER_PRODUCT_IMAGES = (
    "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=500",
    "https://images.unsplash.com/photo-1572635196237-14b3f281503f?w=500",
)
PLACEHOLDER_BRAND_LOGO = "https://images.unsplash.com/photo-1621768216002-5ac171876625?w=200"


@dataclass
class FileUpload:
    """Raw bytes of an uploaded file."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


# A URL, a data URI, or raw file bytes.
MediaSource = Union[str, FileUpload]


def _timestamp() -> int:
    return int(time.time())


def placeholder_images(count: int = 2) -> List[Dict[str, str]]:
    stamp = int(time.time() * 1000)
    return [
        {"public_id": f"product_{stamp}_{i + 1}", "url": url}
        for i, url in enumerate(PLACEHOLDER_PRODUCT_IMAGES[:count])
    ]


def placeholder_logo() -> Dict[str, str]:
    return {"public_id": f"brand_{int(time.time() * 1000)}", "url": PLACEHOLDER_BRAND_LOGO}


class MediaService:
    """Uploads and deletes assets on Cloudinary."""

    def __init__(self, config: MediaConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self.client = client or httpx.Client(timeout=config.timeout)

    @property
    def configured(self) -> bool:
        return self.config.configured

    def _endpoint(self, resource_type: str, action: str) -> str:
        return f"{self.config.base_url}/{self.config.cloud_name}/{resource_type}/{action}"

    def sign(self, params: Dict[str, Any]) -> str:
        """SHA-1 request signature over the sorted, `&`-joined parameters plus the API secret."""
        payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{payload}{self.config.api_secret}".encode("utf-8")).hexdigest()

    def _signed(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = {**params, "timestamp": _timestamp()}
        return {**params, "api_key": self.config.api_key, "signature": self.sign(params)}

    def upload(self, source: MediaSource, folder: str) -> Dict[str, str]:
        """Upload one asset and return `{"public_id", "url"}`."""
        if isinstance(source, FileUpload):
            resource_type = "auto"
            data = self._signed({"folder": folder})
            files = {"file": (source.filename, source.content, source.content_type)}
        else:
            resource_type = "image"
            data = {**self._signed({"folder": folder}), "file": source}
            files = None

        response = self.client.post(self._endpoint(resource_type, "upload"), data=data, files=files)
        response.raise_for_status()
        result = response.json()
        log.info(f"Uploaded {color_palette['value'](result['public_id'])} to {folder}")
        return {"public_id": result["public_id"], "url": result["secure_url"]}

    def upload_many(self, sources: List[MediaSource], folder: str) -> List[Dict[str, str]]:
        return [self.upload(source, folder) for source in sources]

    def destroy(self, public_id: str) -> None:
        if not self.configured:
            log.debug(f"Media service not configured, keeping {public_id}")
            return
        response = self.client.post(
            self._endpoint("image", "destroy"), data=self._signed({"public_id": public_id})
        )
        response.raise_for_status()
        log.info(f"Destroyed {color_palette['value'](public_id)}")

    def destroy_many(self, images: List[Dict[str, str]]) -> None:
        for image in images:
            if image.get("public_id"):
                self.destroy(image["public_id"])
