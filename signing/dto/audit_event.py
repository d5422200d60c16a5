"""Audit event DTO for the signing trail.

Events are not stored in their own table; AuditService writes them to the
central event log (core.logging).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class AuditAction(Enum):
    """Audit action types for signing."""
    DOCUMENT_REGISTERED = "document_registered"
    DOCUMENT_SIGNED = "document_signed"
    INTEGRITY_VERIFIED = "integrity_verified"
    INTEGRITY_FAILED = "integrity_failed"
    VALIDATION_FAILED = "validation_failed"
    SIGNING_FAILED = "signing_failed"


class AuditSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class AuditEvent:
    """Immutable audit log event."""

    event_id: str
    event_type: AuditAction
    occurred_at: datetime
    document_id: Optional[str] = None

    action_result: str = "success"
    """Result: 'success' or 'failure'"""

    error_message: Optional[str] = None

    metadata: Dict[str, Any] = field(default_factory=dict)
    """
    Action specific context, e.g. digests:
    {'original_digest': '...', 'result_digest': '...'}
    """

    severity: AuditSeverity = AuditSeverity.INFO

    def to_log_string(self) -> str:
        parts = [self.event_type.value]
        if self.document_id:
            parts.append(f"on {self.document_id}")
        for key, value in self.metadata.items():
            parts.append(f"{key}={value}")
        if self.action_result != "success":
            parts.append(f"[{self.action_result.upper()}]")
        if self.error_message:
            parts.append(f"Error: {self.error_message}")
        return " ".join(parts)
