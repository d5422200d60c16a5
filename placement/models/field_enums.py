from __future__ import annotations
from enum import Enum


class FieldType(str, Enum):
    """Kinds of fields a user can drop onto the page."""
    TEXT = "text"
    DATE = "date"
    SIGNATURE = "signature"
    IMAGE = "image"
    RADIO = "radio"

    @property
    def is_image(self) -> bool:
        return self in (FieldType.SIGNATURE, FieldType.IMAGE)
