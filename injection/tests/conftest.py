from __future__ import annotations

import base64
from io import BytesIO
from typing import Callable

import pytest
from PIL import Image
from reportlab.pdfgen import canvas


def make_pdf(width: float = 595, height: float = 842, pages: int = 1) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(width, height))
    for i in range(pages):
        c.drawString(20, 20, f"page {i + 1}")
        c.showPage()
    c.save()
    return buf.getvalue()


def image_b64(color=(255, 0, 0), size=(10, 10), fmt: str = "PNG", data_url: bool = False) -> str:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    if data_url:
        return f"data:image/{fmt.lower()};base64,{encoded}"
    return encoded


@pytest.fixture
def blank_pdf() -> bytes:
    return make_pdf()


@pytest.fixture
def png() -> Callable[..., str]:
    return image_b64
