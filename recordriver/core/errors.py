"""Exception types raised by the recording driver.

The hierarchy mirrors PEP 249 so callers can catch driver failures the same way
they would for a real database module. `EndOfData` sits outside of it: running
out of rows is a normal termination condition rather than a fault.
"""

from __future__ import annotations


class Warning(Exception):  # noqa: A001 - PEP 249 name
    """Important warnings such as data truncations."""


class Error(Exception):
    """Base class for every driver error."""


class InterfaceError(Error):
    """Misuse of the driver interface, e.g. a closed connection or cursor."""


class DatabaseError(Error):
    pass


class DataError(DatabaseError):
    pass


class OperationalError(DatabaseError):
    pass


class IntegrityError(DatabaseError):
    pass


class InternalError(DatabaseError):
    pass


class ProgrammingError(DatabaseError):
    pass


class NotSupportedError(DatabaseError):
    pass


class UnknownSessionError(InternalError):
    """A statement was recorded against a session missing from the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Session '{name}' is not registered")
        self.name = name


class DriverAlreadyRegisteredError(ProgrammingError):
    """A driver name was registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Driver '{name}' is already registered")
        self.name = name


class EndOfData(Exception):
    """Raised by `Response.next_row` once every row has been consumed."""
