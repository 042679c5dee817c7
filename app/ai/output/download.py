"""
Image download helpers - filename synthesis and data URL decoding.
"""

import base64
import binascii
import re
from typing import Tuple

DEFAULT_IMAGE_NAME = "generated_image"
IMAGE_EXTENSION = ".jpeg"
MAX_NAME_CHARS = 30

_WHITESPACE = re.compile(r"\s+")
_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def build_download_filename(alt_text: str) -> str:
    """
    Filename for a generated image.

    Takes the first 30 characters of the alt text, collapses whitespace runs
    to underscores, and falls back to "generated_image" when nothing is left.

    Example:
        >>> build_download_filename("A red fox in snow")
        'A_red_fox_in_snow.jpeg'
    """
    stem = _WHITESPACE.sub("_", alt_text[:MAX_NAME_CHARS])
    return f"{stem or DEFAULT_IMAGE_NAME}{IMAGE_EXTENSION}"


def build_data_url(image_b64: str, mime_type: str = "image/jpeg") -> str:
    return f"data:{mime_type};base64,{image_b64}"


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URL into its MIME type and raw bytes.

    Raises:
        ValueError: If the URL is not a base64 data URL or the payload is corrupt
    """
    match = _DATA_URL.match(data_url)
    if not match:
        raise ValueError("Not a base64 data URL")
    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return match.group("mime"), payload
