"""Filesystem implementation of StorageAdapter.

Layout below the data directory:
    originals/<key>/original.pdf
    signed-pdfs/signed-<key>-<timestamp>.pdf

``<key>`` is the file-safe document id followed by a short hash of the raw id,
so ids that only differ in unsafe characters never share a file.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional
import hashlib
import re

from signing.adapters.storage_adapter import StorageAdapter

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")
_KEY_HASH_LEN = 12


def safe_name(document_id: str) -> str:
    """Document id reduced to characters that are safe in a file name."""
    name = _UNSAFE.sub("_", document_id).strip(".")
    return name or "_"


def storage_key(document_id: str) -> str:
    """Unique, file-safe name for a document id."""
    digest = hashlib.sha256(document_id.encode("utf-8")).hexdigest()[:_KEY_HASH_LEN]
    return f"{safe_name(document_id)}-{digest}"


class FilesystemStorageAdapter(StorageAdapter):
    """Local filesystem implementation of StorageAdapter."""

    def __init__(self, root_path: str | Path):
        self._root = Path(root_path)
        self._originals = self._root / "originals"
        self._results = self._root / "signed-pdfs"
        self._originals.mkdir(parents=True, exist_ok=True)
        self._results.mkdir(parents=True, exist_ok=True)

    def save_original(self, *, document_id: str, data: bytes) -> str:
        doc_dir = self._originals / storage_key(document_id)
        doc_dir.mkdir(parents=True, exist_ok=True)
        dest_path = doc_dir / "original.pdf"
        dest_path.write_bytes(data)
        return str(dest_path)

    def save_result(self, *, document_id: str, data: bytes, timestamp: str) -> str:
        dest_path = self._results / f"signed-{storage_key(document_id)}-{timestamp}.pdf"
        dest_path.write_bytes(data)
        return str(dest_path)

    def read(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()

    def result_path(self, filename: str) -> Optional[str]:
        candidate = (self._results / filename).resolve()
        if candidate.parent != self._results.resolve() or not candidate.is_file():
            return None
        return str(candidate)
