"""JSONL-backed observability helpers for recorded executions."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from recordriver.core.logging_utils import build_log_path, utc_now_iso


class ExecutionObservationSink(Protocol):
    """Records lifecycle events emitted by a session registry."""

    def log_event(self, session: str, event: str, payload: dict[str, Any]) -> None:  # pragma: no cover - interface
        ...


def _write_jsonl(target: Path, payload: dict[str, Any]) -> None:
    with target.open("a", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, default=str)
        handle.write("\n")


def _build_event(session: str, event: str, payload: dict[str, Any]) -> dict[str, Any]:
    enriched = {key: value for key, value in payload.items() if value is not None}
    enriched.setdefault("session", session)
    enriched.setdefault("event", event)
    enriched.setdefault("timestamp", utc_now_iso())
    return enriched


@dataclass(slots=True)
class JSONLExecutionLogger(ExecutionObservationSink):
    """Persists registry events as one JSONL file per session."""

    base_dir: Path
    _paths: dict[str, Path] = field(init=False, repr=False, default_factory=dict)
    _lock: threading.Lock = field(init=False, repr=False, default_factory=threading.Lock)

    def log_event(self, session: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        prepared = _build_event(session, event, payload)
        with self._lock:
            target = self._paths.get(session)
            if target is None:
                target = build_log_path(self.base_dir, session, prepared["timestamp"])
                self._paths[session] = target
            # A deleted session starts a new file when it is opened again.
            if event == "session_deleted":
                self._paths.pop(session, None)
            _write_jsonl(target, prepared)


@dataclass(slots=True)
class InMemoryExecutionLogger(ExecutionObservationSink):
    """Keeps events in a list, handy for assertions in tests."""

    events: list[dict[str, Any]] = field(default_factory=list)

    def log_event(self, session: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        self.events.append(_build_event(session, event, payload))
