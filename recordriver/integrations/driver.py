"""Driver facade that routes executions into a `SessionRegistry`.

Connections are bound to a session name. Preparing a statement never touches
the registry; executing it appends to the session's statement log, querying it
appends to the query log and resolves the canned response registered for the
exact query text. Transactions are accepted but have no effect.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from itertools import islice
from typing import Any

from recordriver.core.config import DEFAULT_ROW_KEYWORDS
from recordriver.core.errors import InterfaceError, ProgrammingError
from recordriver.core.registry import SessionRegistry
from recordriver.core.response import Response

LOGGER = logging.getLogger(__name__)

NUM_INPUT_UNKNOWN = -1


def keyword_classifier(keywords: Iterable[str]) -> Callable[[str], bool]:
    """Return a predicate telling whether an operation's first keyword produces rows."""

    accepted = frozenset(keyword.upper() for keyword in keywords)

    def returns_rows(operation: str) -> bool:
        parts = operation.lstrip(" \t\r\n(").split(None, 1)
        return bool(parts) and parts[0].upper() in accepted

    return returns_rows


@dataclass(frozen=True, slots=True)
class ExecResult:
    """Outcome of a statement that returns no rows."""

    last_insert_id: int = 0
    rows_affected: int = 0


class Transaction:
    """No-op transaction; commit and rollback always succeed."""

    def commit(self) -> None:
        LOGGER.debug("Transaction commit ignored")

    def rollback(self) -> None:
        LOGGER.debug("Transaction rollback ignored")

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


@dataclass(slots=True)
class Statement:
    """A query text prepared on a connection."""

    connection: Connection
    sql: str

    def num_input(self) -> int:
        """Placeholder count; always unknown."""

        return NUM_INPUT_UNKNOWN

    def execute(self, params: Sequence[Any] | dict[str, Any] = ()) -> ExecResult:
        """Record the statement. *params* are accepted and ignored."""

        self.connection._check_open()
        self.connection.registry.record_statement(self.connection.name, self.sql)
        return ExecResult()

    def query(self, params: Sequence[Any] | dict[str, Any] = ()) -> Response:
        """Record the query and return its canned response. *params* never affect matching."""

        self.connection._check_open()
        return self.connection.registry.record_query(self.connection.name, self.sql)

    def close(self) -> None:
        pass


class Connection:
    """A connection bound to one session of a registry."""

    def __init__(
        self,
        registry: SessionRegistry,
        name: str,
        returns_rows: Callable[[str], bool] | None = None,
    ) -> None:
        self.registry = registry
        self.name = name
        self.returns_rows = returns_rows or keyword_classifier(DEFAULT_ROW_KEYWORDS)
        self.closed = False

    def prepare(self, query: str) -> Statement:
        self._check_open()
        return Statement(connection=self, sql=query)

    def cursor(self) -> Cursor:
        self._check_open()
        return Cursor(self)

    def begin(self) -> Transaction:
        self._check_open()
        return Transaction()

    def commit(self) -> None:
        self._check_open()

    def rollback(self) -> None:
        self._check_open()

    def close(self) -> None:
        """Delete the session this connection records into."""

        if self.closed:
            return
        self.closed = True
        self.registry.delete_session(self.name)
        LOGGER.debug("Closed connection %s", self.name)

    def _check_open(self) -> None:
        if self.closed:
            raise InterfaceError(f"Connection '{self.name}' is closed")

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Connection(name={self.name!r}, closed={self.closed})"


class Driver:
    """Opens connections whose sessions live in *registry*."""

    def __init__(
        self,
        registry: SessionRegistry,
        row_keywords: Iterable[str] = DEFAULT_ROW_KEYWORDS,
    ) -> None:
        self.registry = registry
        self.row_keywords = tuple(row_keywords)

    def open(self, name: str) -> Connection:
        self.registry.ensure_session(name)
        LOGGER.debug("Opened connection %s", name)
        return Connection(self.registry, name, keyword_classifier(self.row_keywords))


@dataclass(eq=False)
class Cursor:
    """PEP 249 cursor over a `Connection`."""

    connection: Connection
    arraysize: int = 1
    description: tuple[tuple[Any, ...], ...] | None = field(default=None, init=False)
    rowcount: int = field(default=-1, init=False)
    lastrowid: int | None = field(default=None, init=False)
    closed: bool = field(default=False, init=False)
    _response: Response | None = field(default=None, init=False, repr=False)

    def execute(
        self, operation: str, parameters: Sequence[Any] | dict[str, Any] = ()
    ) -> Cursor:
        """Run *operation* as a query or a statement depending on its first keyword."""

        self._check_open()
        statement = self.connection.prepare(operation)
        try:
            if self.connection.returns_rows(operation):
                self._set_response(statement.query(parameters))
            else:
                self._set_result(statement.execute(parameters))
        finally:
            statement.close()
        return self

    def executemany(
        self, operation: str, seq_of_parameters: Iterable[Sequence[Any] | dict[str, Any]]
    ) -> Cursor:
        self._check_open()
        statement = self.connection.prepare(operation)
        try:
            result = ExecResult()
            for parameters in seq_of_parameters:
                result = statement.execute(parameters)
            self._set_result(result)
        finally:
            statement.close()
        return self

    def fetchone(self) -> tuple[Any, ...] | None:
        response = self._require_response()
        return next(response, None)

    def fetchmany(self, size: int | None = None) -> list[tuple[Any, ...]]:
        response = self._require_response()
        count = self.arraysize if size is None else size
        return list(islice(response, max(count, 0)))

    def fetchall(self) -> list[tuple[Any, ...]]:
        return list(self._require_response())

    def setinputsizes(self, sizes: Any) -> None:
        pass

    def setoutputsize(self, size: Any, column: Any = None) -> None:
        pass

    def close(self) -> None:
        if self._response is not None:
            self._response.close()
        self._response = None
        self.closed = True

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self._require_response())

    def __enter__(self) -> Cursor:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    def _set_response(self, response: Response) -> None:
        self._response = response
        columns = response.columns()
        self.description = (
            tuple((name, None, None, None, None, None, None) for name in columns)
            if columns
            else None
        )
        self.rowcount = -1
        self.lastrowid = None

    def _set_result(self, result: ExecResult) -> None:
        self._response = None
        self.description = None
        self.rowcount = result.rows_affected
        self.lastrowid = result.last_insert_id

    def _require_response(self) -> Response:
        self._check_open()
        if self._response is None:
            raise ProgrammingError("No result set; execute a row-returning query first")
        return self._response

    def _check_open(self) -> None:
        if self.closed:
            raise InterfaceError("Cursor is closed")
        self.connection._check_open()
