"""Utility helpers for moving images around as data URIs."""

from __future__ import annotations

import base64
import binascii
import io
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

DEFAULT_MIME_TYPE = "image/png"
_DATA_URI_PREFIX = "data:"
_BASE64_MARKER = ";base64"


def to_data_uri(payload: bytes | str, mime_type: Optional[str] = None) -> str:
    """Return a ``data:<mime>;base64,<payload>`` reference.

    ``payload`` may be raw image bytes or text that is already base64 encoded.
    """
    if isinstance(payload, (bytes, bytearray)):
        encoded = base64.b64encode(bytes(payload)).decode("ascii")
    else:
        encoded = payload
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{encoded}"


def split_data_uri(reference: str) -> Tuple[Optional[str], str]:
    """Split an image reference into ``(mime_type, base64_payload)``.

    References without a data-URI header come back unchanged with a ``None``
    media type, so splitting an already stripped payload is a no-op.
    """
    if not reference.startswith(_DATA_URI_PREFIX) or "," not in reference:
        return None, reference

    header, payload = reference.split(",", 1)
    media = header[len(_DATA_URI_PREFIX):]
    if media.endswith(_BASE64_MARKER):
        media = media[: -len(_BASE64_MARKER)]
    mime_type = media.split(";", 1)[0] or None
    return mime_type, payload


def decode_data_uri(reference: str) -> Tuple[str, bytes]:
    """Return ``(mime_type, raw_bytes)`` for a data URI or bare base64 payload."""
    mime_type, payload = split_data_uri(reference)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image reference is not valid base64 data.") from exc
    return mime_type or DEFAULT_MIME_TYPE, data


def sniff_mime_type(data: bytes) -> str:
    """Detect the media type of encoded image bytes with Pillow."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError("Uploaded file is not a readable image.") from exc
    mime_type = Image.MIME.get(image_format or "")
    return mime_type or DEFAULT_MIME_TYPE


def encode_upload(data: bytes, mime_type: Optional[str] = None) -> str:
    """Turn local file bytes into a self-contained image reference."""
    if not data:
        raise ValueError("Uploaded file is empty.")
    return to_data_uri(data, mime_type or sniff_mime_type(data))


def data_uri_to_image(reference: Optional[str]) -> Optional[Image.Image]:
    """Load an image reference into a PIL image for display."""
    if not reference:
        return None
    _, data = decode_data_uri(reference)
    image = Image.open(io.BytesIO(data))
    image.load()
    return image
