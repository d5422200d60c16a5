from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class SignedDocumentRecord:
    """
    One row of ``signed_documents``: where the original and the result live
    and the SHA-256 digests taken when they were written.
    """
    document_id: str
    original_path: Optional[str] = None
    result_path: Optional[str] = None
    original_digest: Optional[str] = None
    result_digest: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SignedDocumentRecord":
        return cls(
            document_id=row["document_id"],
            original_path=row["original_path"],
            result_path=row["result_path"],
            original_digest=row["original_digest"],
            result_digest=row["result_digest"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def path_for(self, which: str) -> Optional[str]:
        return self.original_path if which == "original" else self.result_path

    def digest_for(self, which: str) -> Optional[str]:
        return self.original_digest if which == "original" else self.result_digest
