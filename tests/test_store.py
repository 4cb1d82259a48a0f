"""Tests for the SQL record store and document lookup against a mocked session."""

import re
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from candidate_evaluation.documents.lookup import SqlDocumentLookup
from candidate_evaluation.errors import DocumentNotFoundError
from candidate_evaluation.evaluation.store import SqlRecordStore
from candidate_evaluation.models.enums import EvaluationStatusEnum


def captured_statement(session: MagicMock):
    """Compile the statement passed to session.execute for PostgreSQL."""
    stmt = session.execute.call_args[0][0]
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


def split_upsert(sql: str) -> tuple[str, str]:
    insert_part, _, set_part = sql.partition("DO UPDATE SET")
    return insert_part, set_part


class TestSqlRecordStoreWrites:
    """Each transition is a single upsert keyed on job_id."""

    def test_mark_processing_starts_new_attempt(self):
        """Conflict on job_id bumps attempt and clears result."""
        session = MagicMock()
        with patch("candidate_evaluation.evaluation.store.get_session", return_value=session):
            SqlRecordStore().mark_processing("run-1")

        sql, params = captured_statement(session)
        insert_part, set_part = split_upsert(sql)

        assert sql.startswith("INSERT INTO evaluation_results")
        assert "ON CONFLICT (job_id)" in insert_part
        assert params["job_id"] == "run-1"
        assert params["attempt"] == 1
        assert "status = excluded.status" in set_part
        assert "result = NULL" in set_part
        assert re.search(r"attempt = \(?evaluation_results\.attempt \+", set_part)
        assert "updated_at = now()" in set_part
        session.commit.assert_called_once()
        session.close.assert_called_once()

    def test_mark_completed_keeps_attempt(self):
        session = MagicMock()
        result = {"cv_match_rate": 0.8, "overall_summary": "Good fit."}
        with patch("candidate_evaluation.evaluation.store.get_session", return_value=session):
            SqlRecordStore().mark_completed("run-1", result)

        sql, params = captured_statement(session)
        insert_part, set_part = split_upsert(sql)

        assert "ON CONFLICT (job_id)" in insert_part
        assert params["result"] == result
        assert "status = excluded.status" in set_part
        assert "result = excluded.result" in set_part
        assert "attempt" not in set_part

    def test_mark_failed_stores_error_object(self):
        session = MagicMock()
        with patch("candidate_evaluation.evaluation.store.get_session", return_value=session):
            SqlRecordStore().mark_failed("run-1", "Document 3 not found.")

        sql, params = captured_statement(session)
        _, set_part = split_upsert(sql)

        assert params["result"] == {"error": "Document 3 not found."}
        assert "result = excluded.result" in set_part
        assert "attempt" not in set_part

    def test_write_failure_propagates_and_closes_session(self):
        session = MagicMock()
        session.execute.side_effect = OperationalError("INSERT", {}, Exception("server closed"))
        with patch("candidate_evaluation.evaluation.store.get_session", return_value=session):
            with pytest.raises(OperationalError):
                SqlRecordStore().mark_completed("run-1", {})

        session.commit.assert_not_called()
        session.close.assert_called_once()


class TestSqlRecordStoreGet:
    """Tests for SqlRecordStore.get."""

    def test_returns_record(self):
        session = MagicMock()
        row = MagicMock(
            job_id="run-1",
            status=EvaluationStatusEnum.COMPLETED,
            result={"overall_summary": "ok"},
            attempt=2,
        )
        session.execute.return_value.scalar_one_or_none.return_value = row
        with patch("candidate_evaluation.evaluation.store.get_session", return_value=session):
            record = SqlRecordStore().get("run-1")

        assert record.job_id == "run-1"
        assert record.status == EvaluationStatusEnum.COMPLETED
        assert record.result == {"overall_summary": "ok"}
        assert record.attempt == 2
        session.close.assert_called_once()

    def test_missing_returns_none(self):
        session = MagicMock()
        session.execute.return_value.scalar_one_or_none.return_value = None
        with patch("candidate_evaluation.evaluation.store.get_session", return_value=session):
            assert SqlRecordStore().get("nope") is None

        session.close.assert_called_once()

    def test_query_failure_closes_session(self):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        with patch("candidate_evaluation.evaluation.store.get_session", return_value=session):
            with pytest.raises(OperationalError):
                SqlRecordStore().get("run-1")

        session.close.assert_called_once()


class TestSqlDocumentLookup:
    """Tests for SqlDocumentLookup.get."""

    def test_resolves_path(self):
        session = MagicMock()
        session.execute.return_value.scalar_one_or_none.return_value = "/uploads/cv.pdf"
        with patch("candidate_evaluation.documents.lookup.get_session", return_value=session):
            reference = SqlDocumentLookup().get(7)

        assert reference.id == 7
        assert reference.storage_path == "/uploads/cv.pdf"
        session.close.assert_called_once()

    def test_missing_document_raises(self):
        session = MagicMock()
        session.execute.return_value.scalar_one_or_none.return_value = None
        with patch("candidate_evaluation.documents.lookup.get_session", return_value=session):
            with pytest.raises(DocumentNotFoundError, match="Document 7 not found."):
                SqlDocumentLookup().get(7)

    def test_query_failure_closes_session(self):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        with patch("candidate_evaluation.documents.lookup.get_session", return_value=session):
            with pytest.raises(OperationalError):
                SqlDocumentLookup().get(7)

        session.close.assert_called_once()
