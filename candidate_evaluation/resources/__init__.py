"""Dagster resources for the candidate evaluation pipeline."""

from candidate_evaluation.resources.openrouter import OpenRouterResource
from candidate_evaluation.resources.semantic_index import SemanticIndexResource

__all__ = [
    "OpenRouterResource",
    "SemanticIndexResource",
]
