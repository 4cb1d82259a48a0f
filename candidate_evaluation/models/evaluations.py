"""Evaluation result records, one per queued evaluation job."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Enum, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from candidate_evaluation.models.base import Base
from candidate_evaluation.models.enums import EvaluationStatusEnum


class EvaluationResult(Base):
    """Durable status and payload of an evaluation job.

    ``result`` holds the merged LLM evaluation when completed, or
    ``{"error": "..."}`` when failed. It stays NULL while processing.
    """

    __tablename__ = "evaluation_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    status: Mapped[EvaluationStatusEnum] = mapped_column(
        Enum(
            EvaluationStatusEnum,
            name="evaluation_status_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=EvaluationStatusEnum.QUEUED,
    )
    result: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    # Incremented each time a (re)delivered job enters PROCESSING
    attempt: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
