"""Collaborators of the evaluation worker.

The worker depends only on these protocols. Production wires the SQL,
PyMuPDF and OpenRouter implementations; tests pass in-memory fakes.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from candidate_evaluation.documents.lookup import DocumentReference
from candidate_evaluation.models.enums import EvaluationStatusEnum
from candidate_evaluation.retrieval.index import RetrievedPassage


@dataclass(frozen=True)
class EvaluationJob:
    """A delivered evaluation request. job_id is assigned by the queue."""

    job_id: str
    cv_document_id: int
    report_document_id: int
    job_title: str


@dataclass
class EvaluationRecord:
    """Snapshot of a stored evaluation."""

    job_id: str
    status: EvaluationStatusEnum
    result: dict[str, Any] | None = None
    attempt: int = 0


class DocumentLookup(Protocol):
    def get(self, document_id: int) -> DocumentReference:
        """Resolve an id; raises DocumentNotFoundError when missing."""
        ...


class TextExtractor(Protocol):
    async def aextract(self, path: str) -> str:
        """Extract text; raises DocumentExtractionError on unreadable files."""
        ...


class ContextIndex(Protocol):
    async def retrieve(self, query: str, top_k: int) -> list[RetrievedPassage]: ...


class LLMCaller(Protocol):
    async def generate(self, prompt: str, operation: str = "completion") -> str:
        """One model call; raises an LLMError subclass on failure."""
        ...


class RecordStore(Protocol):
    def mark_processing(self, job_id: str) -> None: ...

    def mark_completed(self, job_id: str, result: dict[str, Any]) -> None: ...

    def mark_failed(self, job_id: str, error: str) -> None: ...

    def get(self, job_id: str) -> EvaluationRecord | None: ...
