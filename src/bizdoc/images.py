"""Encode images as inline data URIs and decode them for rendering."""

import base64
import binascii
import logging
from pathlib import Path
from typing import Optional, Tuple

from .errors import ImageLoadError

logger = logging.getLogger(__name__)


MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
}


def encode_image_file(path: Path) -> str:
    """Read an image file and return it as a base64 data URI."""
    path = Path(path)
    mime = MIME_TYPES.get(path.suffix.lower())
    if mime is None:
        raise ImageLoadError(f"Unsupported image type: {path.suffix or path.name}")
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ImageLoadError(f"Cannot read image {path}: {exc}") from exc
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def split_data_uri(uri: str) -> Tuple[str, str]:
    """Split 'data:<mime>;base64,<payload>' into (mime, payload)."""
    if not uri.startswith("data:") or "," not in uri:
        raise ImageLoadError("Image is not a data URI")
    header, payload = uri.split(",", 1)
    if not header.endswith(";base64"):
        raise ImageLoadError("Only base64 data URIs are supported")
    return header[len("data:"):-len(";base64")], payload


def decode_data_uri(uri: str) -> bytes:
    """Return the raw bytes behind a data URI (a bare base64 string is accepted too)."""
    payload = split_data_uri(uri)[1] if uri.startswith("data:") else uri
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageLoadError(f"Corrupt image data: {exc}") from exc


def load_logo(path: Optional[Path]) -> str:
    """Load a company logo; a requested logo that cannot be read is an error."""
    if path is None:
        return ""
    return encode_image_file(path)


def load_watermark(path: Optional[Path]) -> str:
    """Load a decorative watermark, degrading to no watermark on failure."""
    if path is None:
        return ""
    try:
        return encode_image_file(path)
    except ImageLoadError as exc:
        logger.warning("Watermark unavailable, continuing without it: %s", exc)
        return ""
