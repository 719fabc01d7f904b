"""PEP 249 module surface for the recording driver.

Application code written against a DB-API module can be pointed at this one:

    from recordriver.integrations import dbapi

    conn = dbapi.connect("s1", registry)
    cur = conn.cursor()
    cur.execute("SELECT * FROM t WHERE id = ?", (1,))

`Cursor.execute` records an operation as a query only when its first keyword is
one of `row_keywords` (SELECT, WITH, VALUES, SHOW, EXPLAIN, PRAGMA, DESCRIBE by
default); everything else is recorded as a statement and has no result set.
Row-returning statements that start with another keyword, such as
`INSERT ... RETURNING id` or `CALL proc()`, need their keyword added:

    conn = dbapi.connect("s1", registry, row_keywords=[*DEFAULT_ROW_KEYWORDS, "INSERT"])
"""

from __future__ import annotations

from collections.abc import Iterable

from recordriver.core.config import DEFAULT_ROW_KEYWORDS
from recordriver.core.errors import (
    DatabaseError,
    DataError,
    Error,
    IntegrityError,
    InterfaceError,
    InternalError,
    NotSupportedError,
    OperationalError,
    ProgrammingError,
    Warning,
)
from recordriver.core.registry import SessionRegistry
from recordriver.integrations.driver import Connection, Cursor, Driver

apilevel = "2.0"
# Threads may share the module and connections, but not cursors.
threadsafety = 2
paramstyle = "qmark"


def connect(
    database: str,
    registry: SessionRegistry,
    *,
    row_keywords: Iterable[str] = DEFAULT_ROW_KEYWORDS,
) -> Connection:
    """Open a connection recording into the session named *database*."""

    return Driver(registry, row_keywords=row_keywords).open(database)


__all__ = [
    "Connection",
    "Cursor",
    "DataError",
    "DatabaseError",
    "Error",
    "IntegrityError",
    "InterfaceError",
    "InternalError",
    "NotSupportedError",
    "OperationalError",
    "ProgrammingError",
    "Warning",
    "apilevel",
    "connect",
    "paramstyle",
    "threadsafety",
]
