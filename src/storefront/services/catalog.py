# src/storefront/services/catalog.py
"""Product and review bookkeeping shared by the API routers."""

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from storefront.core.logging import log
from storefront.services.media import (
    MediaService,
    MediaSource,
    placeholder_images,
    placeholder_logo,
)

DEFAULT_HIGHLIGHTS = ["High quality product"]
DEFAULT_WARRANTY = 1


def average_rating(ratings: Iterable[float]) -> float:
    """Mean of the given ratings, 0 when there are none."""
    values = [float(r) for r in ratings]
    if not values:
        return 0.0
    return sum(values) / len(values)


def parse_specification(raw: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        parsed = None
    if isinstance(parsed, dict):
        return parsed
    return {"title": "Specification", "description": raw}


def parse_specifications(values: Optional[Sequence[Union[str, Dict[str, Any]]]]) -> List[Dict[str, Any]]:
    """Specifications arrive as JSON strings; anything unparsable is kept as a plain description."""
    return [parse_specification(value) for value in values or []]


def normalize_highlights(values: Optional[Sequence[str]]) -> List[str]:
    highlights = [h for h in values or [] if h]
    return highlights or list(DEFAULT_HIGHLIGHTS)


def resolve_product_media(
    media: MediaService,
    images: Sequence[MediaSource],
    logo: Optional[MediaSource],
) -> Tuple[List[Dict[str, str]], Dict[str, str]]:
    """
    Upload product images and the brand logo.

    Without media credentials nothing is uploaded and placeholder images are
    used instead. With credentials, a missing logo or an empty image list
    also falls back to the placeholders.
    """
    if not media.configured:
        log.info("Media service not configured, using placeholder images")
        return placeholder_images(), placeholder_logo()

    uploaded = media.upload_many(list(images), folder="products")
    brand_logo = media.upload(logo, folder="brands") if logo is not None else placeholder_logo()
    return uploaded or placeholder_images(count=1), brand_logo


def replace_product_images(
    media: MediaService, current: List[Dict[str, str]], sources: Sequence[MediaSource]
) -> List[Dict[str, str]]:
    """Destroy the current images and upload the new ones in their place."""
    media.destroy_many(current)
    if not sources:
        return []
    if not media.configured:
        return placeholder_images(count=min(len(sources), 2))
    return media.upload_many(list(sources), folder="products")


def replace_brand_logo(
    media: MediaService, current: Dict[str, str], source: MediaSource
) -> Dict[str, str]:
    if current.get("public_id"):
        media.destroy(current["public_id"])
    if not media.configured:
        return placeholder_logo()
    return media.upload(source, folder="brands")
