"""
Request payload -> validated subject (text or screenshot).
"""
from __future__ import annotations

import base64
import binascii
import re
from typing import Any, Mapping, Optional

from ..errors import ValidationError
from ..models import ImageSubject, TextSubject

# magic bytes -> MIME type
_IMAGE_SIGNATURES = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)
_WHITESPACE = re.compile(r"\s+")


def _sniff_mime(blob: bytes) -> Optional[str]:
    for magic, mime in _IMAGE_SIGNATURES:
        if blob.startswith(magic):
            return mime
    if blob[:4] == b"RIFF" and blob[8:12] == b"WEBP":
        return "image/webp"
    return None


def extract_text(payload: Optional[Mapping[str, Any]], min_length: int = 1) -> TextSubject:
    """
    Pull `text` out of the request payload.

    Numbers are stringified (query strings and loosely typed clients send
    them); lists, objects and blanks are rejected.
    """
    raw = (payload or {}).get("text")
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        raw = str(raw)
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Please provide 'text' to verify.")

    text = raw.strip()
    if len(text) < min_length:
        raise ValidationError(
            "text is required",
            detail=f"'text' must be at least {min_length} characters long.",
        )
    return TextSubject(text=text)


def extract_image(payload: Optional[Mapping[str, Any]], max_bytes: int) -> ImageSubject:
    """
    Pull `image_base64` out of the request payload.

    Android sometimes sends a full `data:image/...;base64,XXXX` URL, so
    everything up to and including `base64,` is dropped before decoding.
    """
    raw = (payload or {}).get("image_base64")
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(
            "Missing or invalid 'image_base64' in JSON body",
            detail="Expected {\"image_base64\": \"BASE64_STRING\"}.",
        )

    cleaned = raw.split("base64,", 1)[1] if "base64," in raw else raw
    cleaned = _WHITESPACE.sub("", cleaned)

    # decoded size is ~3/4 of the encoded length; reject early before decoding
    if len(cleaned) * 3 // 4 > max_bytes:
        raise ValidationError("Image too large", detail=f"Limit is {max_bytes} bytes.")

    try:
        blob = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("'image_base64' is not valid base64") from None

    if not blob:
        raise ValidationError("'image_base64' is empty")
    if len(blob) > max_bytes:
        raise ValidationError("Image too large", detail=f"Limit is {max_bytes} bytes.")

    mime = _sniff_mime(blob)
    if mime is None:
        raise ValidationError(
            "Unsupported image encoding",
            detail="Send a JPEG, PNG, GIF or WEBP screenshot.",
        )
    return ImageSubject(data_b64=cleaned, mime_type=mime)
