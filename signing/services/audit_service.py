"""Audit logging for signing.

Uses the central event logger instead of an own database table.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, TYPE_CHECKING
from uuid import uuid4

from core.helpers.date_time_helper import utc_now
from signing.dto.audit_event import AuditAction, AuditEvent, AuditSeverity

if TYPE_CHECKING:
    from core.logging.logic.logger import Logger

_LEVELS = {
    AuditSeverity.INFO: "INFO",
    AuditSeverity.WARNING: "WARNING",
    AuditSeverity.ERROR: "ERROR",
}


class AuditService:
    """Writes AuditEvents to the central event log under feature ``signing``."""

    def __init__(self, event_logger: "Logger"):
        self._log = event_logger
        self._feature = "signing"

    def log(self, event: AuditEvent) -> None:
        self._log.log(
            self._feature,
            event.event_type.value,
            level=_LEVELS[event.severity],
            reference_id=event.document_id,
            message=event.to_log_string(),
        )

    def log_action(
        self,
        *,
        action: AuditAction,
        document_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        severity: AuditSeverity = AuditSeverity.INFO,
        result: str = "success",
        error_message: Optional[str] = None,
    ) -> AuditEvent:
        """
        Build and log an event.

        Returns:
            Created AuditEvent (already logged)
        """
        event = AuditEvent(
            event_id=str(uuid4()),
            event_type=action,
            occurred_at=utc_now(),
            document_id=document_id,
            action_result=result,
            error_message=error_message,
            metadata=metadata or {},
            severity=severity,
        )
        self.log(event)
        return event

    def log_registered(self, *, document_id: str, digest: str) -> AuditEvent:
        return self.log_action(
            action=AuditAction.DOCUMENT_REGISTERED,
            document_id=document_id,
            metadata={"original_digest": digest},
        )

    def log_signed(self, *, document_id: str, original_digest: str, result_digest: str,
                   field_count: int) -> AuditEvent:
        return self.log_action(
            action=AuditAction.DOCUMENT_SIGNED,
            document_id=document_id,
            metadata={
                "fields": field_count,
                "original_digest": original_digest,
                "result_digest": result_digest,
            },
        )

    def log_verification(self, *, document_id: str, which: str, valid: bool,
                         stored_digest: str, current_digest: str) -> AuditEvent:
        return self.log_action(
            action=AuditAction.INTEGRITY_VERIFIED if valid else AuditAction.INTEGRITY_FAILED,
            document_id=document_id,
            metadata={"which": which, "stored_digest": stored_digest, "current_digest": current_digest},
            severity=AuditSeverity.INFO if valid else AuditSeverity.WARNING,
            result="success" if valid else "failure",
        )

    def log_error(self, *, action: AuditAction, document_id: Optional[str],
                  error_message: str) -> AuditEvent:
        severity = AuditSeverity.WARNING if action is AuditAction.VALIDATION_FAILED else AuditSeverity.ERROR
        return self.log_action(
            action=action,
            document_id=document_id,
            error_message=error_message,
            severity=severity,
            result="failure",
        )
