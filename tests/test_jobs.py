"""Tests for the Dagster job wiring and resources."""

from unittest.mock import MagicMock, patch

from dagster import Backoff, Jitter

from candidate_evaluation.config import EvaluationSettings
from candidate_evaluation.errors import IndexUnavailableError
from candidate_evaluation.evaluation.store import InMemoryRecordStore
from candidate_evaluation.evaluation.strategies import (
    DirectEvaluationStrategy,
    RagEvaluationStrategy,
)
from candidate_evaluation.jobs import (
    EVALUATION_JOB_NAME,
    build_worker,
    evaluation_job,
    evaluation_retry_policy,
)
from candidate_evaluation.models.enums import EvaluationStrategyEnum
from candidate_evaluation.resources.openrouter import OpenRouterResource
from candidate_evaluation.resources.semantic_index import SemanticIndexResource


class TestRetryPolicy:
    def test_three_attempts_with_exponential_backoff(self):
        assert evaluation_retry_policy.max_retries == 2
        assert evaluation_retry_policy.delay == 5
        assert evaluation_retry_policy.backoff == Backoff.EXPONENTIAL
        assert evaluation_retry_policy.jitter == Jitter.PLUS_MINUS

    def test_job_name(self):
        assert evaluation_job.name == EVALUATION_JOB_NAME


class TestBuildWorker:
    """Tests for build_worker strategy selection."""

    def test_rag_strategy_uses_loaded_index(self):
        settings = EvaluationSettings(strategy=EvaluationStrategyEnum.RAG, similarity_top_k=3)
        semantic_index = MagicMock(index=MagicMock(), load_error=None)
        records = InMemoryRecordStore()

        worker = build_worker(
            settings,
            OpenRouterResource(api_key="k"),
            semantic_index,
            records=records,
            documents=MagicMock(),
            extractor=MagicMock(),
        )

        assert isinstance(worker.strategy, RagEvaluationStrategy)
        assert worker.strategy.unavailable_reason() is None
        assert worker.records is records

    def test_rag_strategy_reports_load_error(self):
        settings = EvaluationSettings(strategy=EvaluationStrategyEnum.RAG, similarity_top_k=3)
        semantic_index = MagicMock(index=None, load_error="rubric_passages is empty")

        worker = build_worker(
            settings,
            OpenRouterResource(api_key="k"),
            semantic_index,
            records=InMemoryRecordStore(),
            documents=MagicMock(),
            extractor=MagicMock(),
        )

        assert worker.strategy.unavailable_reason() == "index unavailable: rubric_passages is empty"

    def test_direct_strategy_ignores_index(self):
        settings = EvaluationSettings(strategy=EvaluationStrategyEnum.DIRECT, similarity_top_k=3)

        worker = build_worker(
            settings,
            OpenRouterResource(api_key="k"),
            None,
            records=InMemoryRecordStore(),
            documents=MagicMock(),
            extractor=MagicMock(),
        )

        assert isinstance(worker.strategy, DirectEvaluationStrategy)
        assert worker.strategy.unavailable_reason() is None


class TestSemanticIndexResource:
    """Tests for SemanticIndexResource setup."""

    def test_disabled_resource_skips_load(self):
        """The direct strategy never touches rubric_passages."""
        resource = SemanticIndexResource(openrouter=OpenRouterResource(api_key="k"), enabled=False)

        with patch("candidate_evaluation.resources.semantic_index.get_session") as get_session:
            resource.setup_for_execution(MagicMock())

        get_session.assert_not_called()
        assert resource.index is None
        assert resource.load_error is None

    def test_enabled_resource_keeps_load_error(self):
        resource = SemanticIndexResource(openrouter=OpenRouterResource(api_key="k"))

        with (
            patch("candidate_evaluation.resources.semantic_index.get_session") as get_session,
            patch(
                "candidate_evaluation.resources.semantic_index.load_semantic_index",
                side_effect=IndexUnavailableError("rubric_passages is empty."),
            ),
        ):
            resource.setup_for_execution(MagicMock())

        get_session.return_value.close.assert_called_once()
        assert resource.index is None
        assert resource.load_error == "rubric_passages is empty."

    def test_get_resources_disables_index_for_direct_strategy(self, monkeypatch):
        from candidate_evaluation.definitions import get_resources

        monkeypatch.setenv("EVALUATION_STRATEGY", "direct")

        assert get_resources()["semantic_index"].enabled is False
