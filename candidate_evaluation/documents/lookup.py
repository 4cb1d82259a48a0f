"""Resolve document ids to storage paths."""

from dataclasses import dataclass

from sqlalchemy import select

from candidate_evaluation.db import get_session
from candidate_evaluation.errors import DocumentNotFoundError
from candidate_evaluation.models.documents import Document


@dataclass(frozen=True)
class DocumentReference:
    """Where an uploaded document lives on disk."""

    id: int
    storage_path: str


class SqlDocumentLookup:
    """DocumentLookup over the ``documents`` table."""

    def get(self, document_id: int) -> DocumentReference:
        session = get_session()
        try:
            path = session.execute(
                select(Document.path).where(Document.id == document_id)
            ).scalar_one_or_none()
        finally:
            session.close()

        if path is None:
            raise DocumentNotFoundError(document_id)
        return DocumentReference(id=document_id, storage_path=path)
