"""Canned result sets returned for registered queries."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from recordriver.core.errors import EndOfData


@dataclass(slots=True, eq=False)
class Response:
    """Column names plus the rows still waiting to be read.

    Rows are consumed destructively: each successful read removes the row it
    returned, so a response registered for a query is drained across every
    execution of that query and is never restarted. Reads are not locked; a
    response has a single consumer.
    """

    cols: list[str] = field(default_factory=list)
    data: list[Sequence[Any]] = field(default_factory=list)

    def columns(self) -> list[str]:
        """Return the column names as registered."""

        return self.cols

    def next_row(self) -> tuple[Any, ...]:
        """Pop and return the first remaining row."""

        if not self.data:
            raise EndOfData()
        return tuple(self.data.pop(0))

    def close(self) -> None:
        """Release the result set. Nothing is held, so this is a no-op."""

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return self

    def __next__(self) -> tuple[Any, ...]:
        try:
            return self.next_row()
        except EndOfData:
            raise StopIteration from None
