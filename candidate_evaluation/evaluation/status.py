"""Result query path used by the API and the CLI."""

from typing import Any

from candidate_evaluation.errors import EvaluationNotFoundError
from candidate_evaluation.evaluation.interfaces import RecordStore


def get_evaluation_status(store: RecordStore, job_id: str) -> dict[str, Any]:
    """Return the user-facing view of an evaluation.

    Completed and failed evaluations include ``result`` (the merged scores, or
    ``{"error": ...}``); queued or processing ones return only id and status.

    Raises:
        EvaluationNotFoundError: no record exists for job_id
    """
    record = store.get(job_id)
    if record is None:
        raise EvaluationNotFoundError(job_id)

    response: dict[str, Any] = {"id": record.job_id, "status": record.status.value}
    if record.status.is_terminal:
        response["result"] = record.result
    return response
