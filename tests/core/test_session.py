"""Tests for per-session recording and dispatch."""

from __future__ import annotations

from recordriver.core.response import Response
from recordriver.core.session import Session


def test_stmts_joins_statements_with_terminators() -> None:
    session = Session(name="s1")
    session.record_statement("CREATE TABLE t (id INT)")
    session.record_statement("INSERT INTO t VALUES (1)")

    assert session.stmts() == "CREATE TABLE t (id INT);\nINSERT INTO t VALUES (1);\n"


def test_stmts_empty_when_nothing_recorded() -> None:
    assert Session(name="s1").stmts() == ""


def test_record_query_returns_registered_instance() -> None:
    session = Session(name="s1")
    registered = Response(cols=["id"], data=[[1]])
    session.set_response("SELECT id FROM t", registered)

    assert session.record_query("SELECT id FROM t") is registered


def test_record_query_matches_exact_text_only() -> None:
    session = Session(name="s1")
    session.set_response("SELECT id FROM t", Response(cols=["id"], data=[[1]]))

    for variant in ("select id from t", "SELECT id FROM t ", "SELECT  id FROM t"):
        response = session.record_query(variant)
        assert response.columns() == []
        assert response.data == []

    assert session.queries == [
        "select id from t",
        "SELECT id FROM t ",
        "SELECT  id FROM t",
    ]


def test_unmatched_queries_get_fresh_empty_responses() -> None:
    session = Session(name="s1")

    first = session.record_query("SELECT 1")
    second = session.record_query("SELECT 1")

    assert first is not second


def test_snapshot_detaches_logs() -> None:
    session = Session(name="s1")
    session.record_query("SELECT 1")
    snapshot = session.snapshot()

    session.record_query("SELECT 2")

    assert snapshot.queries == ["SELECT 1"]
    assert session.queries == ["SELECT 1", "SELECT 2"]
