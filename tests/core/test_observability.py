"""Tests for JSONL execution logging."""

from __future__ import annotations

import json
from pathlib import Path

from recordriver.core.logging_utils import sanitize_session_name
from recordriver.core.observability import JSONLExecutionLogger
from recordriver.core.registry import SessionRegistry
from recordriver.core.response import Response


def _load_events(path: Path) -> list[dict[str, object]]:
    with path.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle]


def test_jsonl_logger_appends_events(tmp_path: Path) -> None:
    logger = JSONLExecutionLogger(base_dir=tmp_path)

    logger.log_event("T-1", "query_recorded", {"query": "SELECT 1", "matched": False})

    files = sorted(tmp_path.glob("*.jsonl"))
    assert len(files) == 1
    target = files[0]
    assert target.name.endswith("-T-1.jsonl")
    events = _load_events(target)
    assert events[0]["event"] == "query_recorded"
    assert events[0]["session"] == "T-1"
    assert events[0]["matched"] is False
    assert "timestamp" in events[0]


def test_registry_writes_session_log(tmp_path: Path) -> None:
    registry = SessionRegistry(observer=JSONLExecutionLogger(base_dir=tmp_path))

    registry.set_response("s1", "SELECT 1", Response(cols=["one"], data=[[1]]))
    registry.record_query("s1", "SELECT 1")
    registry.record_statement("s1", "DELETE FROM t")

    files = sorted(tmp_path.glob("*-s1.jsonl"))
    assert len(files) == 1
    events = _load_events(files[0])
    assert [event["event"] for event in events] == [
        "session_opened",
        "response_registered",
        "query_recorded",
        "statement_recorded",
    ]
    assert events[3]["query"] == "DELETE FROM t"


def test_sanitize_session_name_handles_dsns() -> None:
    assert sanitize_session_name("file:memdb?mode=memory") == "file-memdb-mode-memory"
    assert sanitize_session_name("///") == "session"


def test_reset_starts_new_log_file_for_reopened_session(tmp_path: Path) -> None:
    registry = SessionRegistry(observer=JSONLExecutionLogger(base_dir=tmp_path))
    registry.ensure_session("s1")
    registry.record_statement("s1", "old")

    registry.reset()
    registry.ensure_session("s1")
    registry.record_statement("s1", "new")

    files = sorted(tmp_path.glob("*-s1*.jsonl"))
    assert len(files) == 2
    logged = [[event["event"] for event in _load_events(path)] for path in files]
    assert ["session_opened", "statement_recorded", "session_deleted"] in logged
    assert ["session_opened", "statement_recorded"] in logged


def test_loggers_keep_separate_session_files(tmp_path: Path) -> None:
    first = SessionRegistry(observer=JSONLExecutionLogger(base_dir=tmp_path))
    second = SessionRegistry(observer=JSONLExecutionLogger(base_dir=tmp_path))
    first.ensure_session("s1")
    second.ensure_session("s1")

    first.delete_session("s1")
    second.record_statement("s1", "DELETE FROM t")

    files = sorted(tmp_path.glob("*-s1*.jsonl"))
    assert len(files) == 2
    statements = [
        event
        for path in files
        for event in _load_events(path)
        if event["event"] == "statement_recorded"
    ]
    assert len(statements) == 1
    owner = next(path for path in files if statements[0] in _load_events(path))
    assert [event["event"] for event in _load_events(owner)] == [
        "session_opened",
        "statement_recorded",
    ]
