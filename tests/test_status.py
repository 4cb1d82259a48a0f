"""Tests for the evaluation status query and the in-memory record store."""

import pytest

from candidate_evaluation.errors import EvaluationNotFoundError
from candidate_evaluation.evaluation.status import get_evaluation_status
from candidate_evaluation.evaluation.store import InMemoryRecordStore
from candidate_evaluation.models.enums import EvaluationStatusEnum


class TestGetEvaluationStatus:
    """Tests for get_evaluation_status."""

    def test_unknown_job_raises_not_found(self):
        with pytest.raises(EvaluationNotFoundError, match="Result for job ID missing-run not found."):
            get_evaluation_status(InMemoryRecordStore(), "missing-run")

    def test_processing_has_no_result(self):
        store = InMemoryRecordStore()
        store.mark_processing("run-1")

        assert get_evaluation_status(store, "run-1") == {"id": "run-1", "status": "processing"}

    def test_completed_includes_result(self):
        store = InMemoryRecordStore()
        store.mark_processing("run-1")
        store.mark_completed("run-1", {"cv_match_rate": 0.9, "overall_summary": "Hire."})

        assert get_evaluation_status(store, "run-1") == {
            "id": "run-1",
            "status": "completed",
            "result": {"cv_match_rate": 0.9, "overall_summary": "Hire."},
        }

    def test_failed_includes_error(self):
        store = InMemoryRecordStore()
        store.mark_processing("run-1")
        store.mark_failed("run-1", "Document 7 not found.")

        response = get_evaluation_status(store, "run-1")

        assert response["status"] == "failed"
        assert response["result"] == {"error": "Document 7 not found."}


class TestInMemoryRecordStore:
    """Tests for InMemoryRecordStore."""

    def test_processing_clears_previous_result(self):
        store = InMemoryRecordStore()
        store.mark_processing("run-1")
        store.mark_failed("run-1", "boom")
        store.mark_processing("run-1")

        record = store.get("run-1")
        assert record.status == EvaluationStatusEnum.PROCESSING
        assert record.result is None
        assert record.attempt == 2

    def test_get_returns_a_copy(self):
        store = InMemoryRecordStore()
        store.mark_completed("run-1", {"score": 1})

        store.get("run-1").result["score"] = 99

        assert store.get("run-1").result == {"score": 1}

    def test_terminal_status_values(self):
        assert EvaluationStatusEnum.COMPLETED.is_terminal
        assert EvaluationStatusEnum.FAILED.is_terminal
        assert not EvaluationStatusEnum.QUEUED.is_terminal
        assert not EvaluationStatusEnum.PROCESSING.is_terminal
