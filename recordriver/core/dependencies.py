"""Factory helpers for constructing a recorder from settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from recordriver.core.config import ResponseFixture, Settings
from recordriver.core.observability import ExecutionObservationSink, JSONLExecutionLogger
from recordriver.core.registry import SessionRegistry
from recordriver.core.response import Response
from recordriver.integrations.driver import Driver


@dataclass(slots=True)
class RecorderDependencies:
    """Registry, driver and optional observer wired together."""

    registry: SessionRegistry
    driver: Driver
    driver_name: str
    execution_logger: ExecutionObservationSink | None = None


def build_dependencies(settings: Settings) -> RecorderDependencies:
    """Create a registry preloaded with the fixtures in *settings*."""

    logs_dir = _resolve_execution_logs_dir(settings)
    execution_logger = JSONLExecutionLogger(base_dir=logs_dir) if logs_dir is not None else None
    registry = SessionRegistry(observer=execution_logger)

    for name, fixture in settings.sessions.items():
        for item in fixture.responses:
            registry.set_response(name, item.query, build_response(item))

    driver = Driver(registry, row_keywords=settings.row_keywords)
    return RecorderDependencies(
        registry=registry,
        driver=driver,
        driver_name=settings.driver_name,
        execution_logger=execution_logger,
    )


def build_response(fixture: ResponseFixture) -> Response:
    """Return a fresh response; rows are copied so draining never touches *fixture*."""

    return Response(cols=list(fixture.columns), data=[list(row) for row in fixture.rows])


def _resolve_execution_logs_dir(settings: Settings) -> Path | None:
    if not settings.paths or not settings.paths.execution_logs_dir:
        return None
    path = Path(settings.paths.execution_logs_dir).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path
