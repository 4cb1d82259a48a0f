"""Database enums for the evaluation schema."""

import enum


class EvaluationStatusEnum(str, enum.Enum):
    """Lifecycle of an evaluation record.

    QUEUED is implicit (the job sits in the queue and has no row yet);
    a row is first written as PROCESSING. COMPLETED and FAILED are terminal.
    """

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (EvaluationStatusEnum.COMPLETED, EvaluationStatusEnum.FAILED)


class EvaluationStrategyEnum(str, enum.Enum):
    """How the worker gathers rubric context before prompting."""

    RAG = "rag"  # Retrieve CV and report rubric passages from the semantic index
    DIRECT = "direct"  # Prompt with the candidate documents only
