from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

from PIL import Image

RGB = Tuple[float, float, float]   # 0.0 – 1.0


@dataclass(frozen=True)
class TextOp:
    field_id: str
    x: float
    y: float          # baseline
    text: str
    font_name: str
    font_size: float
    color: RGB


@dataclass(frozen=True)
class RectOp:
    field_id: str
    x: float
    y: float
    width: float
    height: float
    line_width: float
    color: RGB


@dataclass(frozen=True)
class CircleOp:
    field_id: str
    cx: float
    cy: float
    radius: float
    filled: bool
    line_width: float
    color: RGB


@dataclass(frozen=True)
class ImageOp:
    field_id: str
    x: float
    y: float
    width: float
    height: float
    image: Image.Image


DrawOp = Union[TextOp, RectOp, CircleOp, ImageOp]
