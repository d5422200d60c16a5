"""
PlacementSession – field list of one document while the user edits it.

Native positions are authoritative. The rendered rectangle of each field is a
cached projection through the current viewport; it is recomputed on every
viewport change and, during drag/resize, is the input from which the native
position is re-derived.

The field tuple is never mutated in place: every operation builds a new tuple
and swaps it in.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from ..models.field import Field, PlacedField
from ..models.field_enums import FieldType
from ..models.geometry import RectCSS, RectNative
from ..models.viewport_info import ViewportInfo
from .coordinate_converter import native_to_rendered, rendered_to_native

logger = logging.getLogger(__name__)

DEFAULT_RENDERED_WIDTH = 150.0
DEFAULT_RENDERED_HEIGHT = 30.0
MIN_RENDERED_WIDTH = 50.0
MIN_RENDERED_HEIGHT = 30.0

_CONTENT_KEYS = {"value", "label", "options", "image_data", "signature_data"}


class NoViewportError(RuntimeError):
    """Raised when an operation needs a viewport before the page was rendered."""


def new_field_id() -> str:
    return f"field-{uuid.uuid4().hex}"


class PlacementSession:
    def __init__(self, viewport: Optional[ViewportInfo] = None,
                 fields: Iterable[Field] = ()) -> None:
        self._viewport = viewport
        self._placed: Tuple[PlacedField, ...] = ()
        for f in fields:
            self.add(f)

    # ------------------------------------------------------------ read side
    @property
    def viewport(self) -> Optional[ViewportInfo]:
        return self._viewport

    @property
    def placed(self) -> Tuple[PlacedField, ...]:
        return self._placed

    @property
    def fields(self) -> Tuple[Field, ...]:
        """Native field list in z-order, ready for injection."""
        return tuple(p.field for p in self._placed)

    def get(self, field_id: str) -> PlacedField:
        for p in self._placed:
            if p.id == field_id:
                return p
        raise KeyError(field_id)

    # ------------------------------------------------------------ viewport
    def update_viewport(self, viewport: ViewportInfo) -> None:
        """Re-project every field through the new viewport. Native rects stay as they are."""
        self._viewport = viewport
        self._placed = tuple(
            PlacedField(p.field, native_to_rendered(p.field.position, viewport))
            for p in self._placed
        )

    # ------------------------------------------------------------ creation
    def place_from_palette(self, field_type: FieldType | str) -> Field:
        """Add a field of default size in the middle of the page."""
        vp = self._require_viewport()
        width = DEFAULT_RENDERED_WIDTH / vp.scale
        height = DEFAULT_RENDERED_HEIGHT / vp.scale
        position = RectNative(
            x=vp.pdf_width / 2 - width / 2,
            y=vp.pdf_height / 2 - height / 2,
            width=width,
            height=height,
        )
        return self._add(Field(id=new_field_id(), type=FieldType(field_type), position=position))

    def place_at_drop(self, field_type: FieldType | str, drop_x: float, drop_y: float) -> Field:
        """
        Add a field centred on a drop point given in rendered pixels relative
        to the page's visible top-left corner.
        """
        vp = self._require_viewport()
        rendered = RectCSS(
            x=max(0.0, drop_x - DEFAULT_RENDERED_WIDTH / 2),
            y=max(0.0, drop_y - DEFAULT_RENDERED_HEIGHT / 2),
            width=DEFAULT_RENDERED_WIDTH,
            height=DEFAULT_RENDERED_HEIGHT,
        )
        field = Field(id=new_field_id(), type=FieldType(field_type),
                      position=rendered_to_native(rendered, vp))
        return self._add(field, rendered)

    def add(self, field: Field) -> Field:
        """Add an existing native field, e.g. one restored from the wire."""
        if any(p.id == field.id for p in self._placed):
            raise ValueError(f"Duplicate field id {field.id!r}")
        return self._add(field)

    # ------------------------------------------------------------ mutation
    def move_rendered(self, field_id: str, rendered: RectCSS) -> Field:
        """Apply a drag/resize result. The native position is re-derived from it."""
        vp = self._require_viewport()
        rendered = RectCSS(
            x=max(0.0, rendered.x),
            y=max(0.0, rendered.y),
            width=max(MIN_RENDERED_WIDTH, rendered.width),
            height=max(MIN_RENDERED_HEIGHT, rendered.height),
        )
        current = self.get(field_id)
        updated = current.field.with_position(rendered_to_native(rendered, vp))
        self._replace(field_id, PlacedField(updated, rendered))
        return updated

    def update_content(self, field_id: str, **changes) -> Field:
        unknown = set(changes) - _CONTENT_KEYS
        if unknown:
            raise TypeError(f"Unknown field attributes: {', '.join(sorted(unknown))}")
        if "options" in changes:
            changes["options"] = tuple(changes["options"] or ())
        current = self.get(field_id)
        updated = replace(current.field, **changes)
        self._replace(field_id, PlacedField(updated, current.rendered))
        return updated

    def delete(self, field_id: str) -> None:
        self.get(field_id)
        self._placed = tuple(p for p in self._placed if p.id != field_id)

    # ------------------------------------------------------------ helpers
    def _require_viewport(self) -> ViewportInfo:
        if self._viewport is None:
            raise NoViewportError("Page has not been rendered yet; no viewport available.")
        return self._viewport

    def _add(self, field: Field, rendered: Optional[RectCSS] = None) -> Field:
        vp = self._require_viewport()
        if rendered is None:
            rendered = native_to_rendered(field.position, vp)
        self._placed = self._placed + (PlacedField(field, rendered),)
        logger.debug("placed %s %s at %s", field.type.value, field.id, field.position)
        return field

    def _replace(self, field_id: str, placed: PlacedField) -> None:
        self._placed = tuple(placed if p.id == field_id else p for p in self._placed)
