"""
Calibration of the rendered overlay against known points on the page.

If the rendered page shows up shifted (toolbars, frame quirks), the user can
mark where known reference points actually appear. The mean difference between
expected and observed rendered positions becomes the viewport's
offset_x/offset_y, which only the coordinate converter applies.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from ..models.viewport_info import ViewportInfo


@dataclass(frozen=True)
class CalibrationPoint:
    pdf_x: float   # known native x
    pdf_y: float   # known native y, from bottom
    css_x: float   # observed rendered x
    css_y: float   # observed rendered y, from top


def calculate_offset(points: Sequence[CalibrationPoint], viewport: ViewportInfo) -> Tuple[float, float]:
    if not points:
        return 0.0, 0.0

    dx = 0.0
    dy = 0.0
    for p in points:
        dx += p.css_x - p.pdf_x * viewport.scale
        dy += p.css_y - (viewport.pdf_height - p.pdf_y) * viewport.scale
    return dx / len(points), dy / len(points)


# Text baselines of the generated sample document (see injection.logic.sample_document)
REFERENCE_POINTS: Dict[str, Tuple[float, float]] = {
    "title": (50.0, 750.0),
    "date": (50.0, 720.0),
    "first_paragraph": (50.0, 680.0),
    "signature_label": (50.0, 200.0),
    "date_label": (50.0, 170.0),
}
