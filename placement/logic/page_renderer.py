"""
PageRenderer – rasterizes the first page of a PDF for the placement overlay.

Uses pypdfium2 so that the preview matches the PDF pixel-for-point at scale 1.
The renderer is the rendering surface the ViewportTracker observes: its page
size seeds the tracker, and each render happens at the tracker's current
scale.
"""
from __future__ import annotations

from typing import Optional, Tuple

import pypdfium2 as pdfium  # type: ignore
from PIL import Image

from core.config.config_service import get_config_service
from ..models.viewport_info import ViewportInfo
from .viewport_tracker import ViewportTracker


class PageRenderer:
    def __init__(self, pdf_bytes: bytes) -> None:
        self._pdf_bytes = bytes(pdf_bytes)
        self._size: Optional[Tuple[float, float]] = None

    def page_size(self) -> Tuple[float, float]:
        """Native size of page 1 in points."""
        if self._size is None:
            pdf = pdfium.PdfDocument(self._pdf_bytes)
            try:
                page = pdf[0]
                try:
                    w, h = page.get_size()
                finally:
                    page.close()
            finally:
                pdf.close()
            self._size = (float(w), float(h))
        return self._size

    def tracker(self, *, max_width: Optional[float] = None,
                allow_upscale: Optional[bool] = None) -> ViewportTracker:
        """Tracker for page 1; unset limits come from the [Viewport] config section."""
        if max_width is None or allow_upscale is None:
            cfg = get_config_service().viewport
            max_width = cfg.max_width if max_width is None else max_width
            allow_upscale = cfg.allow_upscale if allow_upscale is None else allow_upscale
        w, h = self.page_size()
        return ViewportTracker(w, h, max_width=max_width, allow_upscale=allow_upscale)

    def render(self, viewport: ViewportInfo) -> Image.Image:
        """Render page 1 at ``viewport.scale``; size ≈ rendered_width x rendered_height."""
        pdf = pdfium.PdfDocument(self._pdf_bytes)
        try:
            page = pdf[0]
            try:
                bitmap = page.render(scale=viewport.scale)
                return bitmap.to_pil().convert("RGB")
            finally:
                page.close()
        finally:
            pdf.close()
