"""Unit tests for canned response row streaming."""

from __future__ import annotations

import pytest

from recordriver.core.errors import EndOfData, Error
from recordriver.core.response import Response


def test_next_row_pops_rows_in_order() -> None:
    response = Response(cols=["id", "name"], data=[[1, "a"], [2, "b"]])

    assert response.next_row() == (1, "a")
    assert response.next_row() == (2, "b")
    with pytest.raises(EndOfData):
        response.next_row()
    assert response.columns() == ["id", "name"]


def test_empty_response_signals_end_immediately() -> None:
    response = Response()

    assert response.columns() == []
    with pytest.raises(EndOfData):
        response.next_row()


def test_end_of_data_is_not_a_driver_error() -> None:
    assert not issubclass(EndOfData, Error)


def test_iteration_drains_response() -> None:
    response = Response(cols=["n"], data=[[1], [2], [3]])

    assert list(response) == [(1,), (2,), (3,)]
    assert response.data == []
    assert list(response) == []


def test_row_width_is_not_validated() -> None:
    response = Response(cols=["only"], data=[[1, 2, 3]])

    assert response.next_row() == (1, 2, 3)


def test_close_is_safe_after_end_of_data() -> None:
    response = Response(cols=["n"], data=[[1]])
    list(response)

    response.close()
    response.close()
