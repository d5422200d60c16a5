from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Tuple

from .field_enums import FieldType
from .geometry import RectCSS, RectNative

_COORD_KEYS = ("x", "y", "width", "height")


@dataclass(frozen=True)
class Field:
    """
    A positioned, typed piece of content to be burned into the document.

    ``position`` is in native space (PDF points, origin bottom-left) and is the
    only authoritative position. Image payloads are base64 strings, optionally
    in ``data:image/...;base64,`` form.
    """
    id: str
    type: FieldType
    position: RectNative
    value: Optional[str] = None
    label: Optional[str] = None
    options: Tuple[str, ...] = field(default_factory=tuple)
    image_data: Optional[str] = None
    signature_data: Optional[str] = None

    def with_position(self, position: RectNative) -> "Field":
        return replace(self, position=position)

    # ---------------------------------------------------------------- wire
    def to_dict(self) -> dict:
        out: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "position": self.position.as_dict(),
        }
        if self.value is not None:
            out["value"] = self.value
        if self.label is not None:
            out["label"] = self.label
        if self.options:
            out["options"] = list(self.options)
        if self.image_data is not None:
            out["imageData"] = self.image_data
        if self.signature_data is not None:
            out["signatureData"] = self.signature_data
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Field":
        """
        Build a Field from its wire form. Coordinates are read from a nested
        ``position`` object or from flat ``x/y/width/height`` keys.
        Input is expected to be validated already; bad numbers raise ValueError.
        """
        coords = coordinate_source(data)
        position = RectNative(*(float(coords[k]) for k in _COORD_KEYS))
        value = data.get("value")
        label = data.get("label")
        return cls(
            id=str(data["id"]),
            type=FieldType(data["type"]),
            position=position,
            value=None if value is None else str(value),
            label=None if label is None else str(label),
            options=tuple(data.get("options") or ()),
            image_data=data.get("imageData"),
            signature_data=data.get("signatureData"),
        )


def coordinate_source(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """The mapping that carries x/y/width/height for a wire field."""
    position = data.get("position")
    if isinstance(position, Mapping):
        return position
    return data


@dataclass(frozen=True)
class PlacedField:
    """A field together with its cached rendered-space projection."""
    field: Field
    rendered: RectCSS

    @property
    def id(self) -> str:
        return self.field.id
