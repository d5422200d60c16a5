"""Signing service: digests, persistence, verification and audit trail."""
from __future__ import annotations

import hashlib
from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfReader

from injection.exceptions.errors import DocumentDecodeError
from injection.tests.conftest import make_pdf
from signing.exceptions.errors import DocumentNotFoundError, ValidationError
from signing.logic.digest import sha256_file, sha256_hex
from signing.tests.conftest import b64, text_field


def _result_file(service, document_id: str) -> Path:
    url = service.get_result(document_id)["resultUrl"]
    return Path(service.result_file(url.rsplit("/", 1)[-1]))


def test_digest_helpers(tmp_path: Path) -> None:
    path = tmp_path / "x.bin"
    path.write_bytes(b"abc")
    expected = hashlib.sha256(b"abc").hexdigest()
    assert sha256_hex(b"abc") == expected
    assert sha256_file(path) == expected


def test_sign_with_bytes(service, sample_pdf: bytes, event_logger) -> None:
    response = service.sign({"documentId": "doc-1", "fields": [text_field()], "documentBytes": b64(sample_pdf)})

    assert response["success"] is True
    assert response["documentId"] == "doc-1"
    assert response["resultUrl"].startswith("/uploads/signed-pdfs/signed-doc-1-")
    assert response["auditTrail"]["originalDigest"] == sha256_hex(sample_pdf)

    result = _result_file(service, "doc-1").read_bytes()
    assert response["auditTrail"]["resultDigest"] == sha256_hex(result)
    assert "Jane Doe" in PdfReader(BytesIO(result)).pages[0].extract_text()

    events = [e.event for e in event_logger.query_logs(feature="signing", reference_id="doc-1")]
    assert "document_signed" in events


def test_sign_uses_registered_original(service, sample_pdf: bytes) -> None:
    registered = service.register_document("doc-2", sample_pdf)
    assert registered["originalDigest"] == sha256_hex(sample_pdf)

    response = service.sign({"documentId": "doc-2", "fields": [text_field()]})
    assert response["auditTrail"]["originalDigest"] == registered["originalDigest"]


def test_sign_unknown_document_without_bytes(service) -> None:
    with pytest.raises(DocumentNotFoundError):
        service.sign({"documentId": "missing", "fields": [text_field()]})


def test_validation_is_logged(service, event_logger) -> None:
    with pytest.raises(ValidationError):
        service.sign({"documentId": "doc-3", "fields": []})
    (entry,) = event_logger.query_logs(event="validation_failed")
    assert entry.reference_id == "doc-3"
    assert entry.log_level == "WARNING"


def test_corrupt_document_is_not_persisted(service, event_logger) -> None:
    with pytest.raises(DocumentDecodeError):
        service.sign({"documentId": "doc-4", "fields": [text_field()], "documentBytes": b64(b"garbage")})
    with pytest.raises(DocumentNotFoundError):
        service.get_result("doc-4")
    assert event_logger.query_logs(event="signing_failed", reference_id="doc-4")


def test_verify_result_and_original(service, sample_pdf: bytes) -> None:
    service.sign({"documentId": "doc-5", "fields": [text_field()], "documentBytes": b64(sample_pdf)})

    result = service.verify({}, "doc-5")
    assert result["which"] == "result"
    assert result["integrityValid"] is True
    assert result["storedDigest"] == result["currentDigest"]

    original = service.verify({"which": "original"}, "doc-5")
    assert original["integrityValid"] is True
    assert original["currentDigest"] == sha256_hex(sample_pdf)


def test_verify_detects_tampering(service, sample_pdf: bytes, event_logger) -> None:
    service.sign({"documentId": "doc-6", "fields": [text_field()], "documentBytes": b64(sample_pdf)})
    path = _result_file(service, "doc-6")
    path.write_bytes(path.read_bytes() + b"\n% tampered")

    outcome = service.verify({"verifyType": "signed"}, "doc-6")
    assert outcome["integrityValid"] is False
    assert outcome["storedDigest"] != outcome["currentDigest"]
    assert event_logger.query_logs(event="integrity_failed", reference_id="doc-6")


def test_verify_unknown_document(service) -> None:
    with pytest.raises(DocumentNotFoundError):
        service.verify({}, "nope")


def test_verify_original_only_registered(service, sample_pdf: bytes) -> None:
    service.register_document("doc-7", sample_pdf)
    assert service.verify({"which": "original"}, "doc-7")["integrityValid"] is True
    with pytest.raises(DocumentNotFoundError):
        service.verify({"which": "result"}, "doc-7")


def test_get_result_reports_latest(service, sample_pdf: bytes) -> None:
    first = service.sign({"documentId": "doc-8", "fields": [text_field(value="one")],
                          "documentBytes": b64(sample_pdf)})
    second = service.sign({"documentId": "doc-8", "fields": [text_field(value="two")]})
    info = service.get_result("doc-8")
    assert info["resultUrl"] == second["resultUrl"]
    assert info["auditTrail"]["resultDigest"] == second["auditTrail"]["resultDigest"]
    assert info["auditTrail"]["originalDigest"] == first["auditTrail"]["originalDigest"]
    assert info["auditTrail"]["createdAt"] <= info["auditTrail"]["updatedAt"]


def test_result_file_rejects_path_escape(service) -> None:
    with pytest.raises(DocumentNotFoundError):
        service.result_file("../formbake.db")


def test_ids_that_look_alike_keep_separate_originals(service, sample_pdf: bytes) -> None:
    two_pages = make_pdf(pages=2)
    service.sign({"documentId": "a/b", "fields": [text_field()], "documentBytes": b64(sample_pdf)})
    service.sign({"documentId": "a_b", "fields": [text_field()], "documentBytes": b64(two_pages)})

    assert service.verify({"which": "original"}, "a/b")["integrityValid"] is True
    assert service.verify({"which": "original"}, "a_b")["integrityValid"] is True

    service.sign({"documentId": "a/b", "fields": [text_field()]})
    assert len(PdfReader(_result_file(service, "a/b")).pages) == 1


@pytest.mark.parametrize("bad_field", [
    {"id": "i", "type": "image", "x": 50, "y": 100, "width": 150, "height": 30, "imageData": 12345},
    {"id": "r", "type": "radio", "x": 50, "y": 100, "width": 150, "height": 30, "label": 7},
])
def test_non_string_field_content_fails_validation(service, sample_pdf: bytes, bad_field) -> None:
    with pytest.raises(ValidationError):
        service.sign({"documentId": "doc-9", "fields": [bad_field], "documentBytes": b64(sample_pdf)})
    with pytest.raises(DocumentNotFoundError):
        service.get_result("doc-9")
