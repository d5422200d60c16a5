"""
HTTP API for signing, lookup and integrity verification.

Run:
    uvicorn server.app:app

POST /sign-pdf            {documentId, fields, documentBytes?}
GET  /pdf/{id}            result URL + audit trail
POST /verify-pdf/{id}     {which?: "original" | "result"}
POST /documents/{id}      {documentBytes}  register an original
GET  /uploads/signed-pdfs/{filename}
GET  /health
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import Body, FastAPI
from fastapi.responses import FileResponse, JSONResponse

from core.helpers.date_time_helper import utc_now_iso
from injection.exceptions.errors import DocumentDecodeError, DocumentEncodeError
from signing.exceptions.errors import DocumentNotFoundError, ValidationError
from signing.logic.request_parser import parse_document_bytes
from signing.logic.signing_service import SigningService, create_signing_service

logger = logging.getLogger(__name__)


def _error_response(exc: Exception, failure: str) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc), "missing": exc.missing})
    if isinstance(exc, DocumentNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})
    if isinstance(exc, (DocumentDecodeError, DocumentEncodeError)):
        return JSONResponse(status_code=422, content={"error": "Invalid PDF document", "details": str(exc)})
    logger.exception("%s: %s", failure, exc)
    return JSONResponse(status_code=500, content={"error": failure, "details": str(exc)})


def create_app(service: Optional[SigningService] = None) -> FastAPI:
    """
    Build the API. Without an explicit service one is created from the
    application config on first use.
    """
    app = FastAPI(title="formbake", version="1.0.0")
    holder: dict[str, SigningService] = {}
    if service is not None:
        holder["service"] = service

    def get_service() -> SigningService:
        if "service" not in holder:
            holder["service"] = create_signing_service()
        return holder["service"]

    def run(call: Callable[[], Any], failure: str) -> Any:
        try:
            return call()
        except Exception as exc:
            return _error_response(exc, failure)

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": utc_now_iso()}

    @app.post("/documents/{document_id}")
    def register_document(document_id: str, payload: Any = Body(None)):
        def call():
            raw = payload.get("documentBytes", payload.get("pdfBytes")) if isinstance(payload, dict) else None
            return get_service().register_document(document_id, parse_document_bytes(raw))
        return run(call, "Failed to store PDF")

    @app.post("/sign-pdf")
    def sign_pdf(payload: Any = Body(None)):
        return run(lambda: get_service().sign(payload), "Failed to sign PDF")

    @app.get("/pdf/{document_id}")
    def get_pdf(document_id: str):
        return run(lambda: get_service().get_result(document_id), "Failed to retrieve PDF")

    @app.post("/verify-pdf/{document_id}")
    def verify_pdf(document_id: str, payload: Any = Body(None)):
        body = payload if isinstance(payload, dict) else {}
        return run(lambda: get_service().verify(body, document_id), "Failed to verify PDF")

    @app.get("/uploads/signed-pdfs/{filename}")
    def download(filename: str):
        def call():
            path = get_service().result_file(filename)
            return FileResponse(path, media_type="application/pdf", filename=filename)
        return run(call, "Failed to retrieve PDF")

    return app


app = create_app()
