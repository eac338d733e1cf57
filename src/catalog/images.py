"""
Image list codec.

A product's ``image_url`` column is a single text value. Current records
hold a JSON array of URLs; older records hold one bare URL. Decoding tries
the array form first and falls back to the legacy form, so it never raises.
"""

import json
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class ImageList:
    """Stored value was a serialized list of URLs."""

    urls: tuple[str, ...]


@dataclass(frozen=True)
class LegacyImage:
    """Stored value was a single bare URL."""

    url: str


@dataclass(frozen=True)
class NoImages:
    """Stored value was empty or null."""


StoredImages = Union[ImageList, LegacyImage, NoImages]


def parse_stored_images(stored: Any) -> StoredImages:
    """Classify a stored image value without normalizing it."""
    if not stored:
        return NoImages()

    # Some clients hand back the array already decoded
    if isinstance(stored, (list, tuple)):
        return ImageList(tuple(str(u) for u in stored))

    text = str(stored)
    try:
        parsed = json.loads(text)
    except (ValueError, TypeError):
        return LegacyImage(text)

    if isinstance(parsed, list):
        return ImageList(tuple(str(u) for u in parsed))

    # Valid JSON but not a list (e.g. a quoted string or a number)
    return LegacyImage(text)


def decode_images(stored: Any) -> list[str]:
    """
    Decode a stored image value into an ordered list of URLs.

    Args:
        stored: Raw ``image_url`` value from the store (str, list or None)

    Returns:
        Ordered list of URLs; empty for falsy input
    """
    parsed = parse_stored_images(stored)
    if isinstance(parsed, ImageList):
        return list(parsed.urls)
    if isinstance(parsed, LegacyImage):
        return [parsed.url]
    return []


def encode_images(urls: list[str]) -> str:
    """Serialize an ordered URL list into the stored text form."""
    return json.dumps(list(urls))
