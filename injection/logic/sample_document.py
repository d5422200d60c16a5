"""
Generates a one-page A4 sample contract for trying out field placement.

Text baselines match placement.logic.calibration.REFERENCE_POINTS so the
document doubles as a calibration target.
"""
from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Optional

from reportlab.pdfgen import canvas

from placement.logic.calibration import REFERENCE_POINTS
from placement.models.viewport_info import A4_HEIGHT_PT, A4_WIDTH_PT

BODY_LINES = (
    "This sample contract is used to try out form field placement.",
    "",
    "Drop fields from the palette onto the page, move and resize them,",
    "then export to bake them into the document.",
    "",
    "Instructions:",
    "1. Place fields from the palette onto the page",
    "2. Resize fields by dragging their bottom-right corner",
    "3. Fill in the fields as needed",
    "4. Sign the document using the signature field",
    "",
    "Fields keep their position relative to the page content when the",
    "viewer is resized or the zoom level changes.",
    "",
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod tempor",
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis",
    "nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat.",
    "",
    "By signing below, you agree to the terms and conditions stated in this document.",
)
LINE_SPACING = 20.0


def generate_sample_pdf(today: Optional[date] = None) -> bytes:
    today = today or date.today()
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(A4_WIDTH_PT, A4_HEIGHT_PT))
    c.setTitle("Sample Contract")
    c.setFillColorRGB(0, 0, 0)
    c.setStrokeColorRGB(0, 0, 0)

    x, y = REFERENCE_POINTS["title"]
    c.setFont("Helvetica-Bold", 24)
    c.drawString(x, y, "Sample Contract")

    x, y = REFERENCE_POINTS["date"]
    c.setFont("Helvetica", 12)
    c.drawString(x, y, f"Date: {today.isoformat()}")

    x, y = REFERENCE_POINTS["first_paragraph"]
    c.setFont("Helvetica", 11)
    for line in BODY_LINES:
        if line:
            c.drawString(x, y, line)
        y -= LINE_SPACING

    c.setLineWidth(1)
    x, y = REFERENCE_POINTS["signature_label"]
    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, y, "Signature:")
    c.line(150, y + 5, 400, y + 5)

    x, y = REFERENCE_POINTS["date_label"]
    c.drawString(x, y, "Date:")
    c.line(100, y + 5, 250, y + 5)

    c.showPage()
    c.save()
    return buf.getvalue()
