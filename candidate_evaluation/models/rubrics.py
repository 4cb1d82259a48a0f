"""Rubric passages backing the semantic index."""

from datetime import datetime

from pgvector.sqlalchemy import Vector
from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from candidate_evaluation.models.base import Base

EMBEDDING_DIMENSIONS = 1536  # openai/text-embedding-3-small


class RubricPassage(Base):
    """One embedded chunk of a reference document.

    Reference documents are the job description, the case study brief and
    the CV / project scoring rubrics. Rows are written offline by
    scripts/ingest_rubrics.py and are read-only to the evaluation pipeline.
    """

    __tablename__ = "rubric_passages"
    __table_args__ = (
        UniqueConstraint("source", "chunk_index", name="uq_rubric_passages_source_chunk"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    source: Mapped[str] = mapped_column(String(255), nullable=False)  # file name
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(Vector(EMBEDDING_DIMENSIONS), nullable=False)
    model_version: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
