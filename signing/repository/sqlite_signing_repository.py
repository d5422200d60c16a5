"""SQLite repository for signed documents.

DB-only: stores paths and digests. File storage is handled by the
storage adapter.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Optional

from core.common.db_interface import create_sqlite_connection
from core.helpers.date_time_helper import utc_now_iso
from signing.models.signed_document import SignedDocumentRecord

logger = logging.getLogger(__name__)


class SQLiteSigningRepository:
    """SQLite backend for ``signed_documents``. One connection, guarded by a lock."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None
        self._ensure_schema()

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = create_sqlite_connection(self._db_path, check_same_thread=False)
        return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    # =========================================================================
    # Schema Management
    # =========================================================================

    def _ensure_schema(self) -> None:
        with self._lock:
            self.conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS signed_documents (
                    document_id TEXT PRIMARY KEY,
                    original_path TEXT,
                    result_path TEXT,
                    original_digest TEXT,
                    result_digest TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            self.conn.commit()

    # =========================================================================
    # CRUD
    # =========================================================================

    def get(self, document_id: str) -> Optional[SignedDocumentRecord]:
        with self._lock:
            row = self.conn.execute(
                "SELECT * FROM signed_documents WHERE document_id = ?", (document_id,)
            ).fetchone()
        return SignedDocumentRecord.from_row(row) if row else None

    def save_original(self, document_id: str, *, path: str, digest: str) -> SignedDocumentRecord:
        """Insert or update the original's location and digest; result columns are kept."""
        now = utc_now_iso()
        with self._lock:
            self.conn.execute(
                """
                INSERT INTO signed_documents
                    (document_id, original_path, original_digest, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(document_id) DO UPDATE SET
                    original_path = excluded.original_path,
                    original_digest = excluded.original_digest,
                    updated_at = excluded.updated_at
                """,
                (document_id, path, digest, now, now),
            )
            self.conn.commit()
        logger.debug("Stored original for %s", document_id)
        return self.get(document_id)  # type: ignore[return-value]

    def save_result(self, document_id: str, *, path: str, digest: str,
                    original_digest: str) -> SignedDocumentRecord:
        """Insert or update the result's location and digest together with the original digest."""
        now = utc_now_iso()
        with self._lock:
            self.conn.execute(
                """
                INSERT INTO signed_documents
                    (document_id, result_path, result_digest, original_digest, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(document_id) DO UPDATE SET
                    result_path = excluded.result_path,
                    result_digest = excluded.result_digest,
                    original_digest = excluded.original_digest,
                    updated_at = excluded.updated_at
                """,
                (document_id, path, digest, original_digest, now, now),
            )
            self.conn.commit()
        logger.debug("Stored result for %s", document_id)
        return self.get(document_id)  # type: ignore[return-value]
