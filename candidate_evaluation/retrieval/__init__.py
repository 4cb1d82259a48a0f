"""Rubric context retrieval."""

from candidate_evaluation.retrieval.index import (
    NO_CONTEXT_PLACEHOLDER,
    IndexedPassage,
    RetrievedPassage,
    SemanticIndex,
    format_context,
    load_semantic_index,
)

__all__ = [
    "NO_CONTEXT_PLACEHOLDER",
    "IndexedPassage",
    "RetrievedPassage",
    "SemanticIndex",
    "format_context",
    "load_semantic_index",
]
