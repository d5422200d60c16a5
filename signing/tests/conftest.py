from __future__ import annotations

import base64
from pathlib import Path

import pytest

from core.logging.logic.logger import Logger
from injection.logic.sample_document import generate_sample_pdf
from signing.adapters.filesystem_storage_adapter import FilesystemStorageAdapter
from signing.logic.signing_service import SigningService
from signing.repository.sqlite_signing_repository import SQLiteSigningRepository
from signing.services.audit_service import AuditService


@pytest.fixture
def event_logger(tmp_path: Path):
    log = Logger(tmp_path / "logs.db")
    yield log
    log.close()


@pytest.fixture
def repository(tmp_path: Path):
    repo = SQLiteSigningRepository(tmp_path / "formbake.db")
    yield repo
    repo.close()


@pytest.fixture
def service(tmp_path: Path, repository: SQLiteSigningRepository, event_logger: Logger) -> SigningService:
    return SigningService(
        repository=repository,
        storage=FilesystemStorageAdapter(tmp_path / "data"),
        audit=AuditService(event_logger),
    )


@pytest.fixture
def sample_pdf() -> bytes:
    return generate_sample_pdf()


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def text_field(field_id: str = "f1", value: str = "Jane Doe") -> dict:
    return {"id": field_id, "type": "text", "x": 150, "y": 200, "width": 150, "height": 20, "value": value}
