"""
ViewportTracker – keeps the current ViewportInfo for one rendered page.

The rendering surface calls :meth:`ViewportTracker.on_resize` whenever its
container changes size. The tracker computes a fresh ViewportInfo and hands it
to every subscriber before returning, so no subscriber ever works with a
stale viewport.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..models.viewport_info import ViewportInfo
from .coordinate_converter import calculate_scale

logger = logging.getLogger(__name__)

ViewportListener = Callable[[ViewportInfo], None]


class ViewportTracker:
    def __init__(
        self,
        pdf_width: float,
        pdf_height: float,
        *,
        max_width: Optional[float] = None,
        allow_upscale: bool = False,
    ) -> None:
        if pdf_width <= 0 or pdf_height <= 0:
            raise ValueError(f"Page size must be positive, got {pdf_width!r} x {pdf_height!r}")
        self._pdf_width = float(pdf_width)
        self._pdf_height = float(pdf_height)
        self._max_width = max_width
        self._allow_upscale = allow_upscale
        self._offset = (0.0, 0.0)
        self._container_width: Optional[float] = None
        self._current: Optional[ViewportInfo] = None
        self._listeners: List[ViewportListener] = []

    # ------------------------------------------------------------ observers
    def subscribe(self, callback: ViewportListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: ViewportListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    @property
    def current(self) -> Optional[ViewportInfo]:
        return self._current

    # ------------------------------------------------------------ updates
    def on_resize(self, container_width: float) -> ViewportInfo:
        """Recompute the viewport for a new container width and publish it."""
        scale = calculate_scale(
            container_width,
            self._pdf_width,
            self._max_width,
            allow_upscale=self._allow_upscale,
        )
        self._container_width = float(container_width)
        return self._publish(scale)

    def set_calibration(self, offset_x: float, offset_y: float) -> Optional[ViewportInfo]:
        """Set the additive calibration offset; re-emits if a viewport exists."""
        self._offset = (float(offset_x), float(offset_y))
        if self._current is None:
            return None
        return self._publish(self._current.scale)

    def _publish(self, scale: float) -> ViewportInfo:
        vp = ViewportInfo.for_page(
            self._pdf_width,
            self._pdf_height,
            scale,
            offset_x=self._offset[0],
            offset_y=self._offset[1],
        )
        self._current = vp
        logger.debug("viewport: container=%s scale=%.6f rendered=%.2fx%.2f",
                     self._container_width, vp.scale, vp.rendered_width, vp.rendered_height)
        for listener in list(self._listeners):
            listener(vp)
        return vp
