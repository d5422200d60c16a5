"""
Validation of sign and verify requests (wire format, camelCase).

Everything is checked before a document is touched. Problems are collected
so the error names every missing or invalid item at once.
"""
from __future__ import annotations

import base64
import binascii
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from placement.models.field import Field, coordinate_source
from placement.models.field_enums import FieldType
from ..exceptions.errors import ValidationError

LEGACY_SIGNATURE_ID = "signature-1"
VERIFY_TARGETS = ("original", "result")
_WHICH_ALIASES = {"signed": "result"}
_COORD_KEYS = ("x", "y", "width", "height")
# optional content keys; when present they must be strings
_TEXT_KEYS = ("value", "label", "imageData", "signatureData")


@dataclass(frozen=True)
class SignRequest:
    document_id: str
    fields: Tuple[Field, ...]
    document_bytes: Optional[bytes] = None


@dataclass(frozen=True)
class VerifyRequest:
    document_id: str
    which: str = "result"


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _coordinate_problems(coords: Any, prefix: str) -> List[str]:
    if not isinstance(coords, Mapping):
        return [prefix]
    problems = []
    for key in _COORD_KEYS:
        n = _number(coords.get(key))
        if n is None or (key in ("width", "height") and n <= 0):
            problems.append(f"{prefix}.{key}")
    return problems


def _field_problems(raw: Any, index: int, seen_ids: set) -> List[str]:
    prefix = f"fields[{index}]"
    if not isinstance(raw, Mapping):
        return [prefix]

    problems = []
    fid = raw.get("id")
    if not isinstance(fid, str) or not fid:
        problems.append(f"{prefix}.id")
    elif fid in seen_ids:
        problems.append(f"{prefix}.id (duplicate)")
    else:
        seen_ids.add(fid)

    try:
        FieldType(raw.get("type"))
    except ValueError:
        problems.append(f"{prefix}.type")

    coords = coordinate_source(raw)
    position_prefix = f"{prefix}.position" if coords is not raw else prefix
    problems.extend(_coordinate_problems(coords, position_prefix))

    for key in _TEXT_KEYS:
        value = raw.get(key)
        if value is not None and not isinstance(value, str):
            problems.append(f"{prefix}.{key}")

    options = raw.get("options")
    if options is not None and (not isinstance(options, list)
                                or not all(isinstance(o, str) for o in options)):
        problems.append(f"{prefix}.options")
    return problems


def _decode_document(raw: Any) -> Optional[bytes]:
    if not isinstance(raw, str) or not raw.strip():
        return None
    data = raw.strip()
    if data.startswith("data:"):
        _, _, data = data.partition(",")
    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None
    return decoded or None


def parse_sign_request(payload: Any) -> SignRequest:
    """
    Validate a sign payload and build a SignRequest.

    Accepts ``documentId``/``fields``/``documentBytes`` and the older
    ``pdfId``/``pdfBytes`` names. A single ``signatureImage`` plus
    ``coordinates`` is turned into one signature field.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(["documentId", "fields"], "Request body must be a JSON object")

    missing: List[str] = []

    document_id = payload.get("documentId", payload.get("pdfId"))
    if not isinstance(document_id, str) or not document_id.strip():
        missing.append("documentId")
        document_id = None

    raw_fields = payload.get("fields")
    field_dicts: List[Mapping[str, Any]] = []
    if raw_fields is not None:
        if not isinstance(raw_fields, list):
            missing.append("fields (expected a list)")
        elif not raw_fields:
            missing.append("fields (empty)")
        else:
            seen: set = set()
            for i, raw in enumerate(raw_fields):
                missing.extend(_field_problems(raw, i, seen))
            field_dicts = raw_fields
    else:
        signature_image = payload.get("signatureImage")
        coordinates = payload.get("coordinates")
        if not signature_image:
            missing.append("fields (or signatureImage)")
        elif not isinstance(signature_image, str):
            missing.append("signatureImage")
            signature_image = None
        if signature_image and coordinates is None:
            missing.append("coordinates")
        elif coordinates is not None:
            missing.extend(_coordinate_problems(coordinates, "coordinates"))
        if signature_image and isinstance(coordinates, Mapping):
            field_dicts = [{
                "id": LEGACY_SIGNATURE_ID,
                "type": FieldType.SIGNATURE.value,
                "position": {k: coordinates.get(k) for k in _COORD_KEYS},
                "signatureData": signature_image,
            }]

    document_bytes = None
    raw_bytes = payload.get("documentBytes", payload.get("pdfBytes"))
    if raw_bytes is not None:
        document_bytes = _decode_document(raw_bytes)
        if document_bytes is None:
            missing.append("documentBytes (invalid base64)")

    if missing:
        raise ValidationError(missing)

    return SignRequest(
        document_id=document_id.strip(),
        fields=tuple(Field.from_dict(d) for d in field_dicts),
        document_bytes=document_bytes,
    )


def parse_document_bytes(raw: Any) -> bytes:
    data = _decode_document(raw)
    if data is None:
        raise ValidationError(["documentBytes"])
    return data


def parse_verify_request(payload: Any, document_id: Optional[str] = None) -> VerifyRequest:
    """``which`` defaults to ``result``; ``verifyType`` and ``signed`` are accepted as aliases."""
    payload = payload if isinstance(payload, Mapping) else {}
    missing: List[str] = []

    doc_id = document_id or payload.get("documentId") or payload.get("pdfId")
    if not isinstance(doc_id, str) or not doc_id.strip():
        missing.append("documentId")

    which = payload.get("which", payload.get("verifyType")) or "result"
    which = _WHICH_ALIASES.get(which, which) if isinstance(which, str) else which
    if which not in VERIFY_TARGETS:
        missing.append("which (original|result)")

    if missing:
        raise ValidationError(missing)
    return VerifyRequest(document_id=doc_id.strip(), which=which)
