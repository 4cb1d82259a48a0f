"""Evaluation record stores.

Each state transition is one upsert keyed on job_id, so a redelivered job
overwrites its own record instead of creating a second one.
"""

import threading
from typing import Any

from sqlalchemy import func, null, select
from sqlalchemy.dialects.postgresql import insert

from candidate_evaluation.db import get_session
from candidate_evaluation.evaluation.interfaces import EvaluationRecord
from candidate_evaluation.models.enums import EvaluationStatusEnum
from candidate_evaluation.models.evaluations import EvaluationResult


class SqlRecordStore:
    """RecordStore over the ``evaluation_results`` table (PostgreSQL)."""

    def mark_processing(self, job_id: str) -> None:
        """Start an attempt: status PROCESSING, result cleared, attempt + 1."""
        stmt = insert(EvaluationResult).values(
            job_id=job_id,
            status=EvaluationStatusEnum.PROCESSING,
            result=null(),
            attempt=1,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[EvaluationResult.job_id],
            set_={
                "status": stmt.excluded.status,
                "result": null(),
                "attempt": EvaluationResult.attempt + 1,
                "updated_at": func.now(),
            },
        )
        self._execute(stmt)

    def mark_completed(self, job_id: str, result: dict[str, Any]) -> None:
        self._write_terminal(job_id, EvaluationStatusEnum.COMPLETED, result)

    def mark_failed(self, job_id: str, error: str) -> None:
        self._write_terminal(job_id, EvaluationStatusEnum.FAILED, {"error": error})

    def get(self, job_id: str) -> EvaluationRecord | None:
        session = get_session()
        try:
            row = session.execute(
                select(EvaluationResult).where(EvaluationResult.job_id == job_id)
            ).scalar_one_or_none()
            if row is None:
                return None
            return EvaluationRecord(
                job_id=row.job_id,
                status=row.status,
                result=row.result,
                attempt=row.attempt,
            )
        finally:
            session.close()

    def _write_terminal(
        self, job_id: str, status: EvaluationStatusEnum, result: dict[str, Any]
    ) -> None:
        stmt = insert(EvaluationResult).values(
            job_id=job_id, status=status, result=result, attempt=0
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[EvaluationResult.job_id],
            set_={
                "status": stmt.excluded.status,
                "result": stmt.excluded.result,
                "updated_at": func.now(),
            },
        )
        self._execute(stmt)

    def _execute(self, stmt) -> None:
        # Errors propagate: a record that cannot be written is an infrastructure
        # failure, and the queue's retry policy takes over.
        session = get_session()
        try:
            session.execute(stmt)
            session.commit()
        finally:
            session.close()


class InMemoryRecordStore:
    """Thread-safe RecordStore kept in process memory.

    Used by tests and local dry runs. ``transitions`` keeps every status
    written per job, in order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, EvaluationRecord] = {}
        self.transitions: dict[str, list[EvaluationStatusEnum]] = {}

    def mark_processing(self, job_id: str) -> None:
        with self._lock:
            previous = self._records.get(job_id)
            attempt = previous.attempt + 1 if previous else 1
            self._records[job_id] = EvaluationRecord(
                job_id=job_id, status=EvaluationStatusEnum.PROCESSING, result=None, attempt=attempt
            )
            self.transitions.setdefault(job_id, []).append(EvaluationStatusEnum.PROCESSING)

    def mark_completed(self, job_id: str, result: dict[str, Any]) -> None:
        self._write_terminal(job_id, EvaluationStatusEnum.COMPLETED, dict(result))

    def mark_failed(self, job_id: str, error: str) -> None:
        self._write_terminal(job_id, EvaluationStatusEnum.FAILED, {"error": error})

    def get(self, job_id: str) -> EvaluationRecord | None:
        with self._lock:
            record = self._records.get(job_id)
            if record is None:
                return None
            return EvaluationRecord(
                job_id=record.job_id,
                status=record.status,
                result=dict(record.result) if record.result is not None else None,
                attempt=record.attempt,
            )

    def __len__(self) -> int:
        return len(self._records)

    def _write_terminal(
        self, job_id: str, status: EvaluationStatusEnum, result: dict[str, Any]
    ) -> None:
        with self._lock:
            previous = self._records.get(job_id)
            self._records[job_id] = EvaluationRecord(
                job_id=job_id,
                status=status,
                result=result,
                attempt=previous.attempt if previous else 0,
            )
            self.transitions.setdefault(job_id, []).append(status)
