from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class RectNative:
    """
    Rectangle in PDF points (1 pt = 1/72 inch), origin bottom-left.
    ``y`` is the distance of the bottom edge from the page bottom.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class RectCSS:
    """
    Rectangle in rendered pixels at the current scale, origin top-left.
    ``y`` is the distance of the top edge from the page top.
    """
    x: float
    y: float
    width: float
    height: float

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


DEFAULT_NATIVE_RECT = RectNative(0.0, 0.0, 100.0, 30.0)
DEFAULT_RENDERED_RECT = RectCSS(0.0, 0.0, 100.0, 30.0)
