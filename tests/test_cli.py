"""Tests for the candidate-eval command line."""

import json
from unittest.mock import patch

from candidate_evaluation.cli import main
from candidate_evaluation.errors import EnqueueError
from candidate_evaluation.evaluation.store import InMemoryRecordStore


class TestEnqueueCommand:
    def test_prints_queued_job(self, capsys):
        with patch("candidate_evaluation.enqueue.enqueue_evaluation", return_value="run-42") as mock:
            exit_code = main(["enqueue", "1", "2", "Backend Engineer"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {"id": "run-42", "status": "queued"}
        mock.assert_called_once_with(1, 2, "Backend Engineer", graphql_url=None)

    def test_enqueue_failure_exits_nonzero(self, capsys):
        with patch(
            "candidate_evaluation.enqueue.enqueue_evaluation",
            side_effect=EnqueueError("Could not reach Dagster"),
        ):
            exit_code = main(["enqueue", "1", "2", "Backend Engineer"])

        assert exit_code == 1
        assert "Could not reach Dagster" in capsys.readouterr().err


class TestStatusCommand:
    def test_prints_status(self, capsys):
        store = InMemoryRecordStore()
        store.mark_processing("run-1")
        with patch("candidate_evaluation.evaluation.store.SqlRecordStore", return_value=store):
            exit_code = main(["status", "run-1"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {"id": "run-1", "status": "processing"}

    def test_unknown_job(self, capsys):
        with patch(
            "candidate_evaluation.evaluation.store.SqlRecordStore", return_value=InMemoryRecordStore()
        ):
            exit_code = main(["status", "nope"])

        assert exit_code == 1
        assert "Result for job ID nope not found." in capsys.readouterr().err
