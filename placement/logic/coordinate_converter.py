"""
Coordinate conversion between rendered space and native PDF space.

Rendered space: origin top-left, pixels, scaled by ``ViewportInfo.scale``.
Native space:   origin bottom-left, PDF points, independent of zoom.

The page renderer draws one point as one pixel at scale 1, so a conversion is
exactly two operations: the scale factor and the vertical flip. Every position
in the system is derived through the two functions below; nothing else
re-derives positions on its own.

Both functions are total: malformed input yields the default rectangle
(0, 0, 100, 30) instead of an exception, and NaN/Infinity never leak out.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

from ..models.geometry import DEFAULT_NATIVE_RECT, DEFAULT_RENDERED_RECT, RectCSS, RectNative
from ..models.viewport_info import A4_HEIGHT_PT, ViewportInfo

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 100.0
DEFAULT_HEIGHT = 30.0


def _finite(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _coord(rect: Any, name: str, default: float) -> float:
    # zero width/height counts as missing, like the browser client did
    value = _finite(getattr(rect, name, None))
    if value is None or (value == 0 and default != 0):
        return default
    return value


def _valid_scale(vp: Any) -> Optional[float]:
    scale = _finite(getattr(vp, "scale", None))
    if scale is None or scale <= 0:
        return None
    return scale


def _page_height(vp: ViewportInfo) -> float:
    height = _finite(getattr(vp, "pdf_height", None))
    return height if height else A4_HEIGHT_PT


def _offsets(vp: ViewportInfo) -> tuple[float, float]:
    return (_finite(getattr(vp, "offset_x", 0.0)) or 0.0,
            _finite(getattr(vp, "offset_y", 0.0)) or 0.0)


def native_to_rendered(rect: RectNative, vp: ViewportInfo) -> RectCSS:
    """Project a native rectangle onto the rendered surface."""
    scale = _valid_scale(vp)
    if rect is None or scale is None:
        logger.warning("native_to_rendered: invalid input rect=%r viewport=%r", rect, vp)
        return DEFAULT_RENDERED_RECT

    x = _coord(rect, "x", 0.0)
    y = _coord(rect, "y", 0.0)
    width = _coord(rect, "width", DEFAULT_WIDTH)
    height = _coord(rect, "height", DEFAULT_HEIGHT)
    off_x, off_y = _offsets(vp)

    # distance from the page top to the rectangle's top edge
    top_from_page_top = _page_height(vp) - y - height

    return RectCSS(
        x=x * scale + off_x,
        y=top_from_page_top * scale + off_y,
        width=width * scale,
        height=height * scale,
    )


def rendered_to_native(rect: RectCSS, vp: ViewportInfo) -> RectNative:
    """Inverse of :func:`native_to_rendered`."""
    scale = _valid_scale(vp)
    if rect is None or scale is None:
        logger.warning("rendered_to_native: invalid input rect=%r viewport=%r", rect, vp)
        return DEFAULT_NATIVE_RECT

    off_x, off_y = _offsets(vp)
    x = (_coord(rect, "x", 0.0) - off_x) / scale
    width = _coord(rect, "width", DEFAULT_WIDTH) / scale
    height = _coord(rect, "height", DEFAULT_HEIGHT) / scale

    top_from_page_top = (_coord(rect, "y", 0.0) - off_y) / scale
    y = _page_height(vp) - top_from_page_top - height

    return RectNative(x=x, y=y, width=width, height=height)


def clamp_to_page(rect: RectNative, page_width: float, page_height: float) -> RectNative:
    """
    Shift ``rect`` so it lies inside the page. Size is kept; only x/y move.
    When the box is larger than the page the lower bound (0) wins.
    """
    x = max(0.0, min(rect.x, page_width - rect.width))
    y = max(0.0, min(rect.y, page_height - rect.height))
    if x == rect.x and y == rect.y:
        return rect
    return RectNative(x=x, y=y, width=rect.width, height=rect.height)


def calculate_scale(container_width: float, pdf_width: float,
                    max_width: Optional[float] = None, *, allow_upscale: bool = False) -> float:
    """
    Zoom factor that fits the page into the container.
    Never above 1 unless upscaling is allowed.
    """
    if pdf_width <= 0:
        raise ValueError(f"pdf_width must be positive, got {pdf_width!r}")
    if container_width <= 0:
        raise ValueError(f"container_width must be positive, got {container_width!r}")
    available = min(container_width, max_width) if max_width else container_width
    scale = available / pdf_width
    return scale if allow_upscale else min(scale, 1.0)
