"""Path and timestamp helpers for per-session JSONL execution logs."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def utc_now_iso() -> str:
    """Return the current UTC time in ISO-8601 with millisecond precision."""

    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_timestamp_slug(iso_timestamp: str | None = None) -> str:
    """Turn an ISO-8601 timestamp (or now) into a sortable filename prefix."""

    moment = None
    if iso_timestamp:
        try:
            moment = datetime.fromisoformat(iso_timestamp.strip().removesuffix("Z"))
        except ValueError:
            moment = None
    moment = moment or datetime.now(UTC)
    return moment.strftime("%Y%m%dT%H%M%S%f")[:-3]


def sanitize_session_name(name: str) -> str:
    """Sanitize a session *name* (often a DSN) so it can be embedded in filenames."""

    return _UNSAFE_CHARS.sub("-", name.strip()).strip("-") or "session"


def build_log_path(base_dir: Path, session: str, timestamp: str | None = None) -> Path:
    """Return a fresh timestamp-prefixed log file path for *session* under *base_dir*.

    An existing file is never reused; a numeric suffix is added instead.
    """

    base = base_dir.expanduser().resolve()
    base.mkdir(parents=True, exist_ok=True)
    stem = f"{make_timestamp_slug(timestamp)}-{sanitize_session_name(session)}"
    target = base / f"{stem}.jsonl"
    counter = 2
    while target.exists():
        target = base / f"{stem}-{counter}.jsonl"
        counter += 1
    return target
