"""In-memory semantic index over rubric passages.

The snapshot (passage text + embedding) is read from ``rubric_passages`` once
at worker startup and never mutated afterwards, so a single SemanticIndex can
be shared by every job handled in the process. Queries are embedded through
the injected embedder and ranked by cosine similarity against all passages;
the rubric corpus is a handful of documents, so a brute-force scan is enough.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from candidate_evaluation.errors import IndexUnavailableError
from candidate_evaluation.models.rubrics import RubricPassage

Embedder = Callable[[str], Awaitable[list[float]]]

NO_CONTEXT_PLACEHOLDER = "No relevant context found."


@dataclass(frozen=True)
class IndexedPassage:
    text: str
    vector: list[float]
    source: str = ""


@dataclass(frozen=True)
class RetrievedPassage:
    text: str
    score: float


def _cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors; 0.0 when either has zero magnitude."""
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = sum(x * x for x in a) ** 0.5
    norm_b = sum(y * y for y in b) ** 0.5
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class SemanticIndex:
    """Read-only nearest-neighbour index."""

    def __init__(self, passages: Sequence[IndexedPassage], embedder: Embedder):
        self._passages = tuple(passages)
        self._embed = embedder

    def __len__(self) -> int:
        return len(self._passages)

    async def retrieve(self, query: str, top_k: int) -> list[RetrievedPassage]:
        """Return the top_k passages most similar to query, best first.

        Ties keep snapshot order, so results are stable for a fixed snapshot.
        Embedding failures propagate; there is no retry here.
        """
        if top_k <= 0 or not self._passages:
            return []
        query_vector = await self._embed(query)
        scored = [
            (_cosine_similarity(query_vector, passage.vector), position, passage)
            for position, passage in enumerate(self._passages)
        ]
        scored.sort(key=lambda item: (-item[0], item[1]))
        return [
            RetrievedPassage(text=passage.text, score=score)
            for score, _, passage in scored[:top_k]
        ]


def format_context(passages: Sequence[RetrievedPassage]) -> str:
    """Render retrieved passages as numbered snippets for a prompt."""
    if not passages:
        return NO_CONTEXT_PLACEHOLDER
    return "\n\n".join(
        f"--- Context Snippet {n} (Score: {passage.score:.2f}) ---\n{passage.text}"
        for n, passage in enumerate(passages, start=1)
    )


def load_semantic_index(session: Session, embedder: Embedder) -> SemanticIndex:
    """Load every rubric passage into memory.

    Raises:
        IndexUnavailableError: the table cannot be read or holds no passages
    """
    try:
        rows = session.execute(
            select(RubricPassage.text, RubricPassage.embedding, RubricPassage.source).order_by(
                RubricPassage.source, RubricPassage.chunk_index
            )
        ).all()
    except SQLAlchemyError as exc:
        raise IndexUnavailableError(f"Failed to read rubric_passages: {exc}") from exc

    if not rows:
        raise IndexUnavailableError(
            "rubric_passages is empty. Did you run scripts/ingest_rubrics.py?"
        )

    passages = [
        IndexedPassage(text=text, vector=[float(x) for x in embedding], source=source)
        for text, embedding, source in rows
    ]
    return SemanticIndex(passages, embedder)
