"""Utilities for loading recorder settings from YAML configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_DRIVER_NAME = "recordriver"
DEFAULT_ROW_KEYWORDS = ("SELECT", "WITH", "VALUES", "SHOW", "EXPLAIN", "PRAGMA", "DESCRIBE")


@dataclass(slots=True)
class PathsSettings:
    execution_logs_dir: str | None = None


@dataclass(slots=True)
class ResponseFixture:
    query: str
    columns: list[str]
    rows: list[list[Any]]


@dataclass(slots=True)
class SessionFixture:
    responses: list[ResponseFixture] = field(default_factory=list)


@dataclass(slots=True)
class Settings:
    driver_name: str = DEFAULT_DRIVER_NAME
    row_keywords: list[str] = field(default_factory=lambda: list(DEFAULT_ROW_KEYWORDS))
    paths: PathsSettings | None = None
    sessions: dict[str, SessionFixture] = field(default_factory=dict)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _parse_response(session: str, raw: dict[str, Any]) -> ResponseFixture:
    query = raw.get("query")
    if not query:
        raise ValueError(f"Response fixture for session '{session}' is missing 'query'")
    rows = raw.get("rows") or []
    return ResponseFixture(
        query=str(query),
        columns=[str(column) for column in raw.get("columns") or []],
        rows=[list(row) for row in rows],
    )


def load_settings(path: str | Path) -> Settings:
    """Read configuration from *path* and return structured settings."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Recorder configuration not found at '{config_path}'")
    raw = _load_yaml(config_path)

    paths_raw: dict[str, Any] | None = raw.get("paths")
    paths = None
    if paths_raw:
        logs_dir = paths_raw.get("execution_logs_dir")
        paths = PathsSettings(execution_logs_dir=str(logs_dir) if logs_dir else None)

    keywords_raw = raw.get("row_keywords")
    row_keywords = (
        [str(keyword).upper() for keyword in keywords_raw]
        if keywords_raw
        else list(DEFAULT_ROW_KEYWORDS)
    )

    sessions_raw = raw.get("sessions") or {}
    sessions: dict[str, SessionFixture] = {}
    for name, values in sessions_raw.items():
        responses_raw = (values or {}).get("responses") or []
        sessions[str(name)] = SessionFixture(
            responses=[_parse_response(str(name), item) for item in responses_raw]
        )

    return Settings(
        driver_name=str(raw.get("driver_name") or DEFAULT_DRIVER_NAME),
        row_keywords=row_keywords,
        paths=paths,
        sessions=sessions,
    )
