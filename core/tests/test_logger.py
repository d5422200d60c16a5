"""Event logger: persistence, filtering and ordering."""
from __future__ import annotations

from pathlib import Path

import pytest

from core.logging.logic.logger import Logger


@pytest.fixture
def log(tmp_path: Path):
    logger = Logger(tmp_path / "nested" / "logs.db")
    yield logger
    logger.close()


def test_log_returns_stored_entry(log: Logger) -> None:
    entry = log.log("signing", "document_signed", reference_id="doc-1", message="ok")
    assert entry.id is not None
    assert entry.log_level == "INFO"
    (stored,) = log.fetch_logs()
    assert stored.event == "document_signed"
    assert stored.reference_id == "doc-1"
    assert stored.as_dict()["timestamp_utc"].endswith("+00:00")


def test_fetch_is_newest_first(log: Logger) -> None:
    for i in range(3):
        log.log("f", f"e{i}")
    assert [e.event for e in log.fetch_logs(limit=2)] == ["e2", "e1"]


def test_query_filters(log: Logger) -> None:
    log.log("signing", "integrity_failed", level="warning", reference_id="a")
    log.log("signing", "integrity_verified", reference_id="b")
    log.log("other", "integrity_failed", reference_id="a")

    hits = log.query_logs(feature="signing", level="WARNING")
    assert [(e.event, e.reference_id) for e in hits] == [("integrity_failed", "a")]
    assert len(log.query_logs(reference_id="a")) == 2


def test_clear(log: Logger) -> None:
    log.log("f", "e")
    log.clear_logs()
    assert log.fetch_logs() == []
