"""Context gathering strategies.

RagEvaluationStrategy is the canonical pipeline: rubric context is retrieved
from the semantic index for both the CV and the report prompt.
DirectEvaluationStrategy prompts with the candidate documents only and never
touches the index.
"""

from typing import Protocol

from candidate_evaluation.config import EvaluationSettings
from candidate_evaluation.errors import IndexUnavailableError
from candidate_evaluation.evaluation.concurrency import gather_in_order
from candidate_evaluation.evaluation.interfaces import ContextIndex
from candidate_evaluation.models.enums import EvaluationStrategyEnum
from candidate_evaluation.retrieval.index import format_context

CV_CONTEXT_QUERY = (
    "Context for evaluating CV for the role: {job_title}. "
    "Include Job Description requirements and CV Scoring Rubric."
)
REPORT_CONTEXT_QUERY = (
    "Context for evaluating Project Report based on Case Study Brief "
    "and Project Scoring Rubric."
)

INDEX_UNAVAILABLE = "index unavailable"


class EvaluationStrategy(Protocol):
    name: str

    def unavailable_reason(self) -> str | None:
        """None when the strategy can run; otherwise why every job must fail."""
        ...

    async def gather_context(self, job_title: str) -> tuple[str | None, str | None]:
        """Return (cv_context, report_context); None means no context section."""
        ...


class RagEvaluationStrategy:
    name = EvaluationStrategyEnum.RAG.value

    def __init__(
        self,
        index: ContextIndex | None,
        top_k: int,
        load_error: str | None = None,
    ):
        self._index = index
        self._top_k = top_k
        self._load_error = load_error

    def unavailable_reason(self) -> str | None:
        if self._index is not None:
            return None
        if self._load_error:
            return f"{INDEX_UNAVAILABLE}: {self._load_error}"
        return INDEX_UNAVAILABLE

    async def gather_context(self, job_title: str) -> tuple[str | None, str | None]:
        if self._index is None:
            raise IndexUnavailableError(INDEX_UNAVAILABLE)
        # Queries are static, so both lookups run side by side
        cv_passages, report_passages = await gather_in_order(
            self._index.retrieve(CV_CONTEXT_QUERY.format(job_title=job_title), self._top_k),
            self._index.retrieve(REPORT_CONTEXT_QUERY, self._top_k),
        )
        return format_context(cv_passages), format_context(report_passages)


class DirectEvaluationStrategy:
    name = EvaluationStrategyEnum.DIRECT.value

    def unavailable_reason(self) -> str | None:
        return None

    async def gather_context(self, job_title: str) -> tuple[str | None, str | None]:
        return None, None


def build_strategy(
    settings: EvaluationSettings,
    index: ContextIndex | None = None,
    load_error: str | None = None,
) -> EvaluationStrategy:
    """Pick the strategy named in settings."""
    if settings.strategy == EvaluationStrategyEnum.DIRECT:
        return DirectEvaluationStrategy()
    return RagEvaluationStrategy(index, settings.similarity_top_k, load_error=load_error)
