"""Storage adapter abstraction.

Defines where original and signed PDFs are kept. Allows switching between
local filesystem and other backends.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional


class StorageAdapter(ABC):
    """Abstract storage for document bytes."""

    @abstractmethod
    def save_original(self, *, document_id: str, data: bytes) -> str:
        """
        Persist the original document.

        Returns:
            Path/URI to stored file
        """
        raise NotImplementedError

    @abstractmethod
    def save_result(self, *, document_id: str, data: bytes, timestamp: str) -> str:
        """
        Persist a signed result as ``signed-<id>-<timestamp>.pdf``.

        Returns:
            Path/URI to stored file
        """
        raise NotImplementedError

    @abstractmethod
    def read(self, path: str) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def result_path(self, filename: str) -> Optional[str]:
        """
        Resolve a result file name (as used in result URLs) to its stored path.

        Returns:
            Path/URI or None if not found or the name escapes the result directory
        """
        raise NotImplementedError
