"""
SigningService – bakes fields into a document and keeps a digest trail.

Sign flow:
    validate → resolve original bytes → digest → inject → digest
    → persist original/result + record → audit event → response

Responses use the camelCase wire format of the HTTP surface.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.helpers.date_time_helper import utc_stamp
from injection.exceptions.errors import InjectionError
from injection.logic.field_injector import FieldInjector
from ..adapters.storage_adapter import StorageAdapter
from ..dto.audit_event import AuditAction
from ..exceptions.errors import DocumentNotFoundError, ValidationError
from ..repository.sqlite_signing_repository import SQLiteSigningRepository
from ..services.audit_service import AuditService
from .digest import sha256_file, sha256_hex
from .request_parser import parse_sign_request, parse_verify_request

logger = logging.getLogger(__name__)


class SigningService:
    def __init__(
        self,
        *,
        repository: SQLiteSigningRepository,
        storage: StorageAdapter,
        audit: AuditService,
        injector: Optional[FieldInjector] = None,
        result_url_prefix: str = "/uploads/signed-pdfs",
    ) -> None:
        self._repo = repository
        self._storage = storage
        self._audit = audit
        self._injector = injector or FieldInjector()
        self._url_prefix = result_url_prefix.rstrip("/")

    def result_url(self, result_path: str) -> str:
        return f"{self._url_prefix}/{Path(result_path).name}"

    # ------------------------------------------------------------------ #
    #  Originals                                                         #
    # ------------------------------------------------------------------ #
    def register_document(self, document_id: str, data: bytes) -> Dict[str, Any]:
        """Store an original so later sign requests may omit the bytes."""
        if not isinstance(document_id, str) or not document_id.strip():
            raise ValidationError(["documentId"])
        if not data:
            raise ValidationError(["documentBytes"])
        document_id = document_id.strip()

        digest = sha256_hex(data)
        path = self._storage.save_original(document_id=document_id, data=data)
        self._repo.save_original(document_id, path=path, digest=digest)
        self._audit.log_registered(document_id=document_id, digest=digest)
        logger.info("Registered original for %s (%s)", document_id, digest)
        return {"documentId": document_id, "originalDigest": digest}

    def _stored_original(self, document_id: str) -> tuple[bytes, str]:
        record = self._repo.get(document_id)
        if record is None or not record.original_path or not self._storage.file_exists(record.original_path):
            raise DocumentNotFoundError(
                "PDF not found. Please provide documentBytes or upload the PDF first."
            )
        data = self._storage.read(record.original_path)
        return data, record.original_digest or sha256_hex(data)

    # ------------------------------------------------------------------ #
    #  Sign                                                              #
    # ------------------------------------------------------------------ #
    def sign(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            request = parse_sign_request(payload)
        except ValidationError as exc:
            doc_id = payload.get("documentId") if isinstance(payload, Mapping) else None
            self._audit.log_error(
                action=AuditAction.VALIDATION_FAILED,
                document_id=doc_id if isinstance(doc_id, str) else None,
                error_message=str(exc),
            )
            raise

        document_id = request.document_id
        if request.document_bytes is not None:
            original = request.document_bytes
            recorded_digest = None
        else:
            original, recorded_digest = self._stored_original(document_id)

        original_digest = sha256_hex(original)
        if recorded_digest is not None and recorded_digest != original_digest:
            logger.warning("Stored original for %s no longer matches its recorded digest", document_id)

        try:
            result = self._injector.inject(original, request.fields)
            result_digest = sha256_hex(result)

            if request.document_bytes is not None:
                original_path = self._storage.save_original(document_id=document_id, data=original)
                self._repo.save_original(document_id, path=original_path, digest=original_digest)

            result_path = self._storage.save_result(
                document_id=document_id, data=result, timestamp=utc_stamp()
            )
            self._repo.save_result(
                document_id,
                path=result_path,
                digest=result_digest,
                original_digest=recorded_digest or original_digest,
            )
        except (InjectionError, OSError) as exc:
            self._audit.log_error(
                action=AuditAction.SIGNING_FAILED, document_id=document_id, error_message=str(exc)
            )
            logger.error("Signing %s failed: %s", document_id, exc)
            raise

        self._audit.log_signed(
            document_id=document_id,
            original_digest=original_digest,
            result_digest=result_digest,
            field_count=len(request.fields),
        )
        logger.info("Signed %s with %d fields -> %s", document_id, len(request.fields), result_path)

        return {
            "success": True,
            "documentId": document_id,
            "resultUrl": self.result_url(result_path),
            "auditTrail": {
                "originalDigest": original_digest,
                "resultDigest": result_digest,
            },
            "message": "PDF signed successfully",
        }

    # ------------------------------------------------------------------ #
    #  Lookup / verify                                                   #
    # ------------------------------------------------------------------ #
    def get_result(self, document_id: str) -> Dict[str, Any]:
        record = self._repo.get(document_id)
        if record is None or not record.result_path:
            raise DocumentNotFoundError("Signed PDF not found")
        return {
            "documentId": document_id,
            "resultUrl": self.result_url(record.result_path),
            "auditTrail": {
                "originalDigest": record.original_digest,
                "resultDigest": record.result_digest,
                "createdAt": record.created_at,
                "updatedAt": record.updated_at,
            },
        }

    def result_file(self, filename: str) -> str:
        path = self._storage.result_path(filename)
        if path is None:
            raise DocumentNotFoundError(f"File not found: {filename}")
        return path

    def verify(self, payload: Optional[Mapping[str, Any]] = None,
               document_id: Optional[str] = None) -> Dict[str, Any]:
        """Re-hash the persisted original or result and compare with the recorded digest."""
        request = parse_verify_request(payload or {}, document_id)
        record = self._repo.get(request.document_id)
        if record is None:
            raise DocumentNotFoundError("PDF not found")

        path = record.path_for(request.which)
        stored = record.digest_for(request.which)
        if not path or not stored or not self._storage.file_exists(path):
            raise DocumentNotFoundError(f"{request.which} PDF file not found")

        current = sha256_file(path)
        valid = current == stored
        self._audit.log_verification(
            document_id=request.document_id,
            which=request.which,
            valid=valid,
            stored_digest=stored,
            current_digest=current,
        )
        if not valid:
            logger.warning("Integrity check failed for %s (%s)", request.document_id, request.which)

        return {
            "documentId": request.document_id,
            "which": request.which,
            "integrityValid": valid,
            "storedDigest": stored,
            "currentDigest": current,
            "message": (
                "PDF integrity verified - document has not been modified"
                if valid
                else "PDF integrity check failed - document may have been modified"
            ),
        }


def create_signing_service(config: Any = None, *, event_logger: Any = None) -> SigningService:
    """Wire a SigningService from the application config."""
    from core.config.config_service import get_config_service
    from core.logging.logic.logger import Logger, get_logger
    from ..adapters.filesystem_storage_adapter import FilesystemStorageAdapter

    cfg = config or get_config_service().app_config
    if event_logger is None:
        event_logger = get_logger() if config is None else Logger(cfg.storage.log_database)
    return SigningService(
        repository=SQLiteSigningRepository(cfg.storage.database),
        storage=FilesystemStorageAdapter(cfg.storage.data_dir),
        audit=AuditService(event_logger),
        result_url_prefix=cfg.server.result_url_prefix,
    )
