"""
Image payload decoding and aspect-preserving placement.
"""
from __future__ import annotations

import base64
import binascii
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from placement.models.geometry import RectNative
from ..exceptions.errors import ImageDecodeError


def payload_bytes(payload: str) -> bytes:
    """Raw bytes of a base64 string or a ``data:image/...;base64,`` URL."""
    if not isinstance(payload, str):
        raise ImageDecodeError(f"Image payload must be a string, got {type(payload).__name__}")
    data = payload.strip()
    if data.startswith("data:"):
        _, _, data = data.partition(",")
    try:
        return base64.b64decode(data, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(f"Invalid base64 image payload: {exc}") from exc


def decode_image(payload: str) -> Image.Image:
    """
    Decode an image payload with Pillow (PNG, JPEG and other formats Pillow
    reads). Returned image is RGB, or RGBA when the source carries alpha.
    """
    raw = payload_bytes(payload)
    if not raw:
        raise ImageDecodeError("Empty image payload")
    try:
        img = Image.open(BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as exc:
        raise ImageDecodeError(f"Unreadable image data: {exc}") from exc

    if img.width <= 0 or img.height <= 0:
        raise ImageDecodeError(f"Image has no area: {img.width}x{img.height}")

    has_alpha = img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info)
    return img.convert("RGBA" if has_alpha else "RGB")


def fit_image(image_width: float, image_height: float, box: RectNative) -> RectNative:
    """
    Largest rectangle with the image's aspect ratio that fits into ``box``,
    centred on both axes.
    """
    image_aspect = image_width / image_height
    box_aspect = box.width / box.height

    if image_aspect > box_aspect:
        # wider than the box: full width, reduced height
        width = box.width
        height = box.width / image_aspect
    else:
        height = box.height
        width = box.height * image_aspect

    return RectNative(
        x=box.x + (box.width - width) / 2,
        y=box.y + (box.height - height) / 2,
        width=width,
        height=height,
    )
