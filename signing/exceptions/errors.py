"""Signing feature exceptions."""
from __future__ import annotations

from typing import Iterable


class SigningError(Exception):
    """Base exception for the signing feature."""


class ValidationError(SigningError):
    """
    The request is rejected before any document is touched.
    ``missing`` lists every missing or invalid item.
    """

    def __init__(self, missing: Iterable[str], message: str | None = None) -> None:
        self.missing = list(missing)
        if message is None:
            message = "Missing or invalid required fields: " + ", ".join(self.missing)
        super().__init__(message)


class DocumentNotFoundError(SigningError):
    """No bytes were supplied and nothing is stored under the document id."""
