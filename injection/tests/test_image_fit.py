from __future__ import annotations

import pytest

from injection.exceptions.errors import ImageDecodeError
from injection.logic.image_fit import decode_image, fit_image
from injection.tests.conftest import image_b64
from placement.models.geometry import RectNative


@pytest.mark.parametrize(
    "image_size, box",
    [
        ((400, 100), RectNative(50, 100, 150, 30)),   # wider than box
        ((100, 400), RectNative(50, 100, 150, 30)),   # taller than box
        ((300, 60), RectNative(10, 10, 100, 100)),
        ((1, 1), RectNative(0, 0, 200, 50)),
    ],
)
def test_fit_keeps_aspect_and_centres(image_size, box: RectNative) -> None:
    iw, ih = image_size
    fitted = fit_image(iw, ih, box)

    assert fitted.width / fitted.height == pytest.approx(iw / ih)
    assert fitted.width <= box.width + 1e-9
    assert fitted.height <= box.height + 1e-9

    left = fitted.x - box.x
    right = box.right - fitted.right
    bottom = fitted.y - box.y
    top = box.top - fitted.top
    assert left == pytest.approx(right)
    assert bottom == pytest.approx(top)


def test_image_narrower_than_box_fills_height() -> None:
    fitted = fit_image(400, 100, RectNative(50, 100, 150, 30))
    assert fitted.width == pytest.approx(120)
    assert fitted.height == pytest.approx(30)
    assert fitted.x == pytest.approx(65)


def test_image_wider_than_box_fills_width() -> None:
    fitted = fit_image(600, 100, RectNative(50, 100, 150, 30))
    assert fitted.width == pytest.approx(150)
    assert fitted.height == pytest.approx(25)
    assert fitted.y == pytest.approx(102.5)


def test_same_aspect_fills_box() -> None:
    box = RectNative(10, 20, 200, 100)
    assert fit_image(20, 10, box) == box


def test_decode_png_and_jpeg_data_url() -> None:
    assert decode_image(image_b64(size=(8, 4))).size == (8, 4)
    img = decode_image(image_b64(fmt="JPEG", data_url=True))
    assert img.mode == "RGB"


@pytest.mark.parametrize("payload", ["", "data:image/png;base64,", "bm90IGFuIGltYWdl", "%%%"])
def test_decode_rejects_garbage(payload: str) -> None:
    with pytest.raises(ImageDecodeError):
        decode_image(payload)


@pytest.mark.parametrize("payload", [12345, b"iVBORw0KGgo=", None])
def test_decode_rejects_non_string_payload(payload) -> None:
    with pytest.raises(ImageDecodeError):
        decode_image(payload)
