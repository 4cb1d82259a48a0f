"""SQLAlchemy models for the candidate evaluation database."""

from candidate_evaluation.models.base import Base
from candidate_evaluation.models.documents import Document
from candidate_evaluation.models.enums import EvaluationStatusEnum, EvaluationStrategyEnum
from candidate_evaluation.models.evaluations import EvaluationResult
from candidate_evaluation.models.rubrics import EMBEDDING_DIMENSIONS, RubricPassage

__all__ = [
    # Base
    "Base",
    # Enums
    "EvaluationStatusEnum",
    "EvaluationStrategyEnum",
    # Tables
    "Document",
    "EvaluationResult",
    "RubricPassage",
    "EMBEDDING_DIMENSIONS",
]
