"""
FieldInjector – burns positioned fields into page 1 of a PDF.

The work is split in two passes:
  1. ``layout`` turns fields into an ordered draw plan (list order = z-order).
     Pure; no PDF involved.
  2. ``inject`` replays the plan onto a reportlab overlay the size of page 1
     and merges it on top of the page with pypdf.

Per-field image failures are absorbed (logged, image skipped, border kept).
Document read/write failures are fatal and raise typed errors.
"""
from __future__ import annotations

import logging
from io import BytesIO
from typing import Iterable, List, Sequence

from pypdf import PdfReader, PdfWriter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from placement.logic.coordinate_converter import clamp_to_page
from placement.models.field import Field
from placement.models.field_enums import FieldType
from placement.models.geometry import RectNative
from ..exceptions.errors import DocumentDecodeError, DocumentEncodeError, ImageDecodeError
from ..models import render_constants as rc
from ..models.draw_ops import CircleOp, DrawOp, ImageOp, RectOp, TextOp
from .image_fit import decode_image, fit_image

logger = logging.getLogger(__name__)


class FieldInjector:
    # ------------------------------------------------------------------ plan
    def layout(self, fields: Iterable[Field], page_width: float, page_height: float) -> List[DrawOp]:
        ops: List[DrawOp] = []
        for f in fields:
            box = clamp_to_page(f.position, page_width, page_height)
            if f.type is FieldType.RADIO:
                ops.extend(self._radio_ops(f, box))
            elif f.type.is_image:
                ops.extend(self._image_ops(f, box))
            else:
                ops.extend(self._text_ops(f, box))
        return ops

    @staticmethod
    def _baseline(box: RectNative) -> float:
        return box.y + box.height / 2 - rc.FONT_SIZE / 2

    @staticmethod
    def _border(f: Field, box: RectNative) -> RectOp:
        return RectOp(f.id, box.x, box.y, box.width, box.height, rc.BORDER_WIDTH, rc.BORDER_COLOR)

    def _text_ops(self, f: Field, box: RectNative) -> List[DrawOp]:
        ops: List[DrawOp] = []
        if f.value:
            ops.append(TextOp(f.id, box.x + rc.TEXT_INSET, self._baseline(box), f.value,
                              rc.FONT_NAME, rc.FONT_SIZE, rc.TEXT_COLOR))
        ops.append(self._border(f, box))
        return ops

    def _image_ops(self, f: Field, box: RectNative) -> List[DrawOp]:
        ops: List[DrawOp] = []
        payload = f.signature_data if f.type is FieldType.SIGNATURE else f.image_data
        if payload:
            try:
                img = decode_image(payload)
            except ImageDecodeError as exc:
                logger.warning("Field %s: image skipped (%s)", f.id, exc)
            else:
                if box.width > 0 and box.height > 0:
                    fitted = fit_image(img.width, img.height, box)
                    ops.append(ImageOp(f.id, fitted.x, fitted.y, fitted.width, fitted.height, img))
                else:
                    logger.warning("Field %s: box has no area, image skipped", f.id)
        ops.append(self._border(f, box))
        return ops

    def _radio_ops(self, f: Field, box: RectNative) -> List[DrawOp]:
        cx = box.x + rc.RADIO_CENTER_OFFSET
        cy = box.y + box.height / 2
        ops: List[DrawOp] = [
            CircleOp(f.id, cx, cy, rc.RADIO_RADIUS, False, rc.RADIO_BORDER_WIDTH, rc.RADIO_COLOR)
        ]
        if (f.value or "").lower() in rc.RADIO_CHECKED_VALUES:
            ops.append(CircleOp(f.id, cx, cy, rc.RADIO_DOT_RADIUS, True, 0.0, rc.RADIO_COLOR))
        if f.label:
            ops.append(TextOp(f.id, box.x + rc.RADIO_LABEL_OFFSET, self._baseline(box), f.label,
                              rc.FONT_NAME, rc.FONT_SIZE, rc.TEXT_COLOR))
        return ops

    # ---------------------------------------------------------------- render
    @staticmethod
    def _make_overlay(page_w: float, page_h: float, ops: Sequence[DrawOp],
                      origin: tuple[float, float] = (0.0, 0.0)) -> bytes:
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=(page_w, page_h))
        if origin != (0.0, 0.0):
            c.translate(*origin)

        for op in ops:
            if isinstance(op, TextOp):
                c.setFillColorRGB(*op.color)
                c.setFont(op.font_name, op.font_size)
                c.drawString(op.x, op.y, op.text)
            elif isinstance(op, RectOp):
                c.setStrokeColorRGB(*op.color)
                c.setLineWidth(op.line_width)
                c.rect(op.x, op.y, op.width, op.height, stroke=1, fill=0)
            elif isinstance(op, CircleOp):
                if op.filled:
                    c.setFillColorRGB(*op.color)
                    c.circle(op.cx, op.cy, op.radius, stroke=0, fill=1)
                else:
                    c.setStrokeColorRGB(*op.color)
                    c.setLineWidth(op.line_width)
                    c.circle(op.cx, op.cy, op.radius, stroke=1, fill=0)
            elif isinstance(op, ImageOp):
                mask = "auto" if op.image.mode == "RGBA" else None
                c.drawImage(ImageReader(op.image), op.x, op.y, width=op.width, height=op.height, mask=mask)

        c.save()
        return buf.getvalue()

    def inject(self, document_bytes: bytes, fields: Iterable[Field]) -> bytes:
        """
        Return a new PDF with ``fields`` burned into page 1.
        ``document_bytes`` is read only; the caller's buffer is left as is.
        """
        try:
            reader = PdfReader(BytesIO(bytes(document_bytes)))
            page_count = len(reader.pages)
            if page_count == 0:
                raise DocumentDecodeError("Document has no pages")
            first = reader.pages[0]
            box = first.mediabox
            page_w, page_h = float(box.width), float(box.height)
            origin = (float(box.left), float(box.bottom))
        except DocumentDecodeError:
            raise
        except Exception as exc:
            raise DocumentDecodeError(f"Cannot read PDF: {exc}") from exc

        ops = self.layout(list(fields), page_w, page_h)
        logger.debug("Injecting %d draw operations into %.1fx%.1f page", len(ops), page_w, page_h)

        try:
            writer = PdfWriter(clone_from=reader)
            if ops:
                overlay_pdf = self._make_overlay(origin[0] + page_w, origin[1] + page_h, ops, origin)
                overlay_reader = PdfReader(BytesIO(overlay_pdf))
                writer.pages[0].merge_page(overlay_reader.pages[0])

            out = BytesIO()
            writer.write(out)
        except Exception as exc:
            raise DocumentEncodeError(f"Cannot write PDF: {exc}") from exc
        return out.getvalue()
