"""Thread-safe table of recording sessions keyed by connection name.

A `SessionRegistry` is an ordinary object: the test harness constructs one,
hands it to the driver it opens connections through, and discards it (or calls
`reset`) at teardown. Every operation holds a single lock for its whole
duration, so operations on different sessions also serialize against each
other. Sessions handed back to callers are snapshots; `Response` objects inside
them are the live registered instances.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from recordriver.core.errors import UnknownSessionError
from recordriver.core.observability import ExecutionObservationSink
from recordriver.core.response import Response
from recordriver.core.session import Session

LOGGER = logging.getLogger(__name__)


class SessionRegistry:
    """Maps session names to `Session` instances under one mutex."""

    def __init__(self, observer: ExecutionObservationSink | None = None) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()
        self.observer = observer

    def ensure_session(self, name: str) -> Session:
        """Create the session for *name* if needed and return a snapshot of it."""

        with self._lock:
            return self._ensure(name).snapshot()

    def lookup(self, name: str) -> tuple[Session | None, bool]:
        """Return a snapshot of the session for *name* and whether it exists."""

        with self._lock:
            session = self._sessions.get(name)
            if session is None:
                return None, False
            return session.snapshot(), True

    def session(self, name: str) -> Session | None:
        session, _ = self.lookup(name)
        return session

    def set_response(self, name: str, query: str, response: Response) -> None:
        """Register *response* for the exact text *query*, replacing any previous one."""

        with self._lock:
            self._ensure(name).set_response(query, response)
            LOGGER.debug("Registered response for session %s: %s", name, query)
            self._emit(
                name,
                "response_registered",
                {"query": query, "columns": list(response.cols), "row_count": len(response.data)},
            )

    def delete_session(self, name: str) -> None:
        with self._lock:
            if self._sessions.pop(name, None) is None:
                return
            LOGGER.debug("Deleted session %s", name)
            self._emit(name, "session_deleted", {})

    def record_statement(self, name: str, query: str) -> None:
        with self._lock:
            self._require(name).record_statement(query)
            LOGGER.debug("Session %s statement: %s", name, query)
            self._emit(name, "statement_recorded", {"query": query})

    def record_query(self, name: str, query: str) -> Response:
        """Log *query* for *name* and return the response it resolves to."""

        with self._lock:
            session = self._require(name)
            matched = query in session.responses
            response = session.record_query(query)
            LOGGER.debug("Session %s query (matched=%s): %s", name, matched, query)
            self._emit(name, "query_recorded", {"query": query, "matched": matched})
            return response

    def names(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def reset(self) -> None:
        """Forget every session, as if each one had been deleted."""

        with self._lock:
            names = list(self._sessions)
            self._sessions.clear()
            for name in names:
                LOGGER.debug("Deleted session %s", name)
                self._emit(name, "session_deleted", {})

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._sessions

    def _ensure(self, name: str) -> Session:
        session = self._sessions.get(name)
        if session is None:
            session = Session(name=name)
            self._sessions[name] = session
            LOGGER.debug("Created session %s", name)
            self._emit(name, "session_opened", {})
        return session

    def _require(self, name: str) -> Session:
        session = self._sessions.get(name)
        if session is None:
            raise UnknownSessionError(name)
        return session

    def _emit(self, name: str, event: str, payload: dict[str, Any]) -> None:
        if self.observer is None:
            return
        # Recording succeeds even when the sink cannot write.
        try:
            self.observer.log_event(name, event, payload)
        except OSError:
            LOGGER.exception("Failed to log %s event for session %s", event, name)
