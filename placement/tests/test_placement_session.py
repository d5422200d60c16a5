"""Placement session: palette/drop placement, drag reconciliation, re-projection."""
from __future__ import annotations

import pytest

from placement.logic.placement_session import (
    DEFAULT_RENDERED_HEIGHT,
    DEFAULT_RENDERED_WIDTH,
    MIN_RENDERED_HEIGHT,
    MIN_RENDERED_WIDTH,
    NoViewportError,
    PlacementSession,
)
from placement.models.field import Field
from placement.models.field_enums import FieldType
from placement.models.geometry import RectCSS, RectNative
from placement.models.viewport_info import ViewportInfo


@pytest.fixture
def half() -> ViewportInfo:
    return ViewportInfo.for_page(595, 842, 0.5)


@pytest.fixture
def session(half: ViewportInfo) -> PlacementSession:
    return PlacementSession(half)


def test_palette_places_default_size_in_page_centre(session: PlacementSession) -> None:
    field = session.place_from_palette("text")
    assert field.type is FieldType.TEXT
    assert field.position.width == pytest.approx(DEFAULT_RENDERED_WIDTH / 0.5)
    assert field.position.height == pytest.approx(DEFAULT_RENDERED_HEIGHT / 0.5)
    assert field.position.x + field.position.width / 2 == pytest.approx(595 / 2)
    assert field.position.y + field.position.height / 2 == pytest.approx(842 / 2)
    placed = session.get(field.id)
    assert placed.rendered.width == pytest.approx(DEFAULT_RENDERED_WIDTH)


def test_drop_centres_box_on_drop_point(session: PlacementSession) -> None:
    field = session.place_at_drop(FieldType.SIGNATURE, 200, 100)
    rendered = session.get(field.id).rendered
    assert rendered == RectCSS(125, 85, DEFAULT_RENDERED_WIDTH, DEFAULT_RENDERED_HEIGHT)
    # rendered (125, 85, 150, 30) at 0.5 -> native x 250, top 170 -> y = 842 - 170 - 60
    assert field.position.x == pytest.approx(250)
    assert field.position.y == pytest.approx(612)


def test_drop_near_corner_is_clamped_to_zero(session: PlacementSession) -> None:
    field = session.place_at_drop("date", 10, 5)
    rendered = session.get(field.id).rendered
    assert (rendered.x, rendered.y) == (0, 0)


def test_placement_without_viewport_fails() -> None:
    with pytest.raises(NoViewportError):
        PlacementSession().place_from_palette("text")


def test_viewport_change_keeps_native_rects(session: PlacementSession) -> None:
    field = session.add(Field("a", FieldType.TEXT, RectNative(50, 700, 150, 30)))
    assert session.get("a").rendered == RectCSS(25, 56, 75, 15)

    session.update_viewport(ViewportInfo.for_page(595, 842, 1.0))
    assert session.get("a").field.position == field.position
    assert session.get("a").rendered == RectCSS(50, 112, 150, 30)


def test_move_rendered_rederives_native(session: PlacementSession) -> None:
    session.add(Field("a", FieldType.TEXT, RectNative(50, 700, 150, 30)))
    updated = session.move_rendered("a", RectCSS(100, 100, 100, 40))
    assert updated.position.x == pytest.approx(200)
    assert updated.position.width == pytest.approx(200)
    assert updated.position.y == pytest.approx(842 - 200 - 80)


def test_move_rendered_enforces_minimum_size(session: PlacementSession) -> None:
    session.add(Field("a", FieldType.TEXT, RectNative(50, 700, 150, 30)))
    session.move_rendered("a", RectCSS(-5, -5, 10, 10))
    rendered = session.get("a").rendered
    assert rendered == RectCSS(0, 0, MIN_RENDERED_WIDTH, MIN_RENDERED_HEIGHT)


def test_update_content_and_delete(session: PlacementSession) -> None:
    session.add(Field("r", FieldType.RADIO, RectNative(10, 10, 100, 20)))
    updated = session.update_content("r", value="checked", label="Yes", options=["Yes", "No"])
    assert updated.value == "checked"
    assert updated.options == ("Yes", "No")
    assert session.fields == (updated,)

    with pytest.raises(TypeError):
        session.update_content("r", position=None)

    session.delete("r")
    assert session.fields == ()
    with pytest.raises(KeyError):
        session.delete("r")


def test_field_list_keeps_insertion_order(session: PlacementSession) -> None:
    session.add(Field("a", FieldType.TEXT, RectNative(0, 0, 100, 30)))
    session.add(Field("b", FieldType.TEXT, RectNative(0, 0, 100, 30)))
    before = session.fields
    session.update_content("a", value="x")
    assert [f.id for f in session.fields] == ["a", "b"]
    assert before[0].value is None


def test_duplicate_id_rejected(session: PlacementSession) -> None:
    session.add(Field("a", FieldType.TEXT, RectNative(0, 0, 100, 30)))
    with pytest.raises(ValueError):
        session.add(Field("a", FieldType.DATE, RectNative(0, 0, 100, 30)))


def test_field_wire_format_accepts_flat_and_nested() -> None:
    flat = Field.from_dict({"id": "f", "type": "image", "x": 1, "y": 2, "width": 3, "height": 4,
                            "imageData": "abc"})
    nested = Field.from_dict({"id": "f", "type": "image",
                              "position": {"x": 1, "y": 2, "width": 3, "height": 4},
                              "imageData": "abc"})
    assert flat == nested
    assert flat.to_dict() == {
        "id": "f",
        "type": "image",
        "position": {"x": 1.0, "y": 2.0, "width": 3.0, "height": 4.0},
        "imageData": "abc",
    }
