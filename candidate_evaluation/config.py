"""Pipeline settings.

Built once when the Dagster definitions load (after ``.env`` is read) and
handed to the worker by reference. Nothing in the pipeline reads settings
from the environment after that point.
"""

import os

from dagster import ConfigurableResource
from pydantic import Field

from candidate_evaluation.models.enums import EvaluationStrategyEnum

# Bounded prefix of each candidate document that is sent to the model
DEFAULT_MAX_DOCUMENT_CHARS = 4000
DEFAULT_SIMILARITY_TOP_K = 3


class EvaluationSettings(ConfigurableResource):
    """Knobs of the evaluation pipeline that are not tied to a single client."""

    strategy: EvaluationStrategyEnum = Field(
        default_factory=lambda: EvaluationStrategyEnum(
            os.getenv("EVALUATION_STRATEGY", EvaluationStrategyEnum.RAG.value).strip().lower()
        ),
        description="'rag' retrieves rubric context before prompting; 'direct' skips retrieval",
    )
    similarity_top_k: int = Field(
        default_factory=lambda: int(os.getenv("EVALUATION_TOP_K", DEFAULT_SIMILARITY_TOP_K)),
        description="Number of rubric passages retrieved per query",
    )
    max_document_chars: int = Field(
        default=DEFAULT_MAX_DOCUMENT_CHARS,
        description="Candidate document text is truncated to this many characters",
    )

    @property
    def uses_index(self) -> bool:
        return self.strategy == EvaluationStrategyEnum.RAG
