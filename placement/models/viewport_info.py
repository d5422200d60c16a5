from __future__ import annotations
from dataclasses import dataclass

# A4 portrait in points
A4_WIDTH_PT = 595.0
A4_HEIGHT_PT = 842.0


@dataclass(frozen=True)
class ViewportInfo:
    """
    Mapping parameters between native (PDF points) and rendered (pixel) space.

    Instances are replaced, never mutated: every resize or re-render yields a
    new ViewportInfo.

    offset_x / offset_y are an optional calibration correction in rendered
    pixels. Only the coordinate converter reads them.
    """
    scale: float
    pdf_width: float
    pdf_height: float
    rendered_width: float
    rendered_height: float
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def for_page(cls, pdf_width: float, pdf_height: float, scale: float,
                 *, offset_x: float = 0.0, offset_y: float = 0.0) -> "ViewportInfo":
        return cls(
            scale=scale,
            pdf_width=pdf_width,
            pdf_height=pdf_height,
            rendered_width=pdf_width * scale,
            rendered_height=pdf_height * scale,
            offset_x=offset_x,
            offset_y=offset_y,
        )
