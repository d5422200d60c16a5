from __future__ import annotations

import pytest

from placement.models.field_enums import FieldType
from signing.exceptions.errors import ValidationError
from signing.logic.request_parser import parse_sign_request, parse_verify_request
from signing.tests.conftest import b64, text_field


def _missing(payload) -> list:
    with pytest.raises(ValidationError) as info:
        parse_sign_request(payload)
    return info.value.missing


def test_valid_request() -> None:
    request = parse_sign_request({"documentId": "doc-1", "fields": [text_field()],
                                  "documentBytes": b64(b"%PDF-1.4")})
    assert request.document_id == "doc-1"
    assert request.document_bytes == b"%PDF-1.4"
    assert request.fields[0].type is FieldType.TEXT
    assert request.fields[0].position.width == 150.0


def test_legacy_names_are_accepted() -> None:
    request = parse_sign_request({"pdfId": "doc-1", "fields": [text_field()], "pdfBytes": b64(b"abc")})
    assert request.document_id == "doc-1"
    assert request.document_bytes == b"abc"


def test_legacy_single_signature() -> None:
    request = parse_sign_request({
        "pdfId": "doc-1",
        "signatureImage": "data:image/png;base64,AAAA",
        "coordinates": {"x": 10, "y": 20, "width": 100, "height": 40},
    })
    (field,) = request.fields
    assert field.id == "signature-1"
    assert field.type is FieldType.SIGNATURE
    assert field.signature_data == "data:image/png;base64,AAAA"
    assert (field.position.x, field.position.height) == (10.0, 40.0)


def test_everything_missing_is_enumerated() -> None:
    assert _missing({}) == ["documentId", "fields (or signatureImage)"]


def test_signature_without_coordinates() -> None:
    assert _missing({"documentId": "d", "signatureImage": "AAAA"}) == ["coordinates"]


def test_empty_and_non_list_fields() -> None:
    assert _missing({"documentId": "d", "fields": []}) == ["fields (empty)"]
    assert _missing({"documentId": "d", "fields": {"id": "x"}}) == ["fields (expected a list)"]


def test_malformed_field_entries() -> None:
    missing = _missing({
        "documentId": "d",
        "fields": [
            {"id": "a", "type": "stamp", "x": 1, "y": 2, "width": 3, "height": 4},
            {"id": "b", "type": "text", "position": {"x": "1", "y": 2, "width": 0, "height": 4}},
            "nonsense",
            {"id": "a", "type": "date", "x": 1, "y": 2, "width": 3, "height": 4},
        ],
    })
    assert missing == [
        "fields[0].type",
        "fields[1].position.x",
        "fields[1].position.width",
        "fields[2]",
        "fields[3].id (duplicate)",
    ]


def test_non_string_content_is_rejected() -> None:
    base = {"type": "radio", "x": 1, "y": 2, "width": 3, "height": 4}
    missing = _missing({
        "documentId": "d",
        "fields": [
            {**base, "id": "r", "label": 7, "value": True},
            {**base, "id": "i", "type": "image", "imageData": 12345},
            {**base, "id": "s", "type": "signature", "signatureData": ["AAAA"]},
            {**base, "id": "o", "options": "Yes"},
        ],
    })
    assert missing == [
        "fields[0].value",
        "fields[0].label",
        "fields[1].imageData",
        "fields[2].signatureData",
        "fields[3].options",
    ]


def test_legacy_signature_image_must_be_a_string() -> None:
    missing = _missing({
        "pdfId": "d",
        "signatureImage": 12345,
        "coordinates": {"x": 10, "y": 20, "width": 100, "height": 40},
    })
    assert missing == ["signatureImage"]


def test_invalid_document_bytes() -> None:
    assert _missing({"documentId": "d", "fields": [text_field()], "documentBytes": "***"}) == [
        "documentBytes (invalid base64)"
    ]


def test_non_object_body() -> None:
    assert _missing(["not", "a", "dict"]) == ["documentId", "fields"]


def test_verify_request_defaults_and_aliases() -> None:
    assert parse_verify_request({}, "d").which == "result"
    assert parse_verify_request({"verifyType": "signed"}, "d").which == "result"
    assert parse_verify_request({"which": "original"}, "d").which == "original"
    with pytest.raises(ValidationError) as info:
        parse_verify_request({"which": "copy"}, "d")
    assert info.value.missing == ["which (original|result)"]
