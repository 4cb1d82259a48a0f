"""Evaluation job pipeline: worker, strategies, record stores and status queries."""

from candidate_evaluation.evaluation.interfaces import (
    ContextIndex,
    DocumentLookup,
    EvaluationJob,
    EvaluationRecord,
    LLMCaller,
    RecordStore,
    TextExtractor,
)
from candidate_evaluation.evaluation.status import get_evaluation_status
from candidate_evaluation.evaluation.store import InMemoryRecordStore, SqlRecordStore
from candidate_evaluation.evaluation.strategies import (
    DirectEvaluationStrategy,
    EvaluationStrategy,
    RagEvaluationStrategy,
    build_strategy,
)
from candidate_evaluation.evaluation.worker import EvaluationWorker

__all__ = [
    # Contracts
    "ContextIndex",
    "DocumentLookup",
    "EvaluationJob",
    "EvaluationRecord",
    "LLMCaller",
    "RecordStore",
    "TextExtractor",
    # Strategies
    "EvaluationStrategy",
    "RagEvaluationStrategy",
    "DirectEvaluationStrategy",
    "build_strategy",
    # Worker and storage
    "EvaluationWorker",
    "InMemoryRecordStore",
    "SqlRecordStore",
    "get_evaluation_status",
]
