"""Exceptions raised by the evaluation pipeline.

Everything under ``EvaluationError`` is an anticipated, per-job failure: the
worker catches it and records a ``failed`` evaluation with the message as the
user-visible error. Any other exception escapes the worker so the queue can
redeliver the job.
"""


class EvaluationError(Exception):
    """Base class for failures that terminate a single evaluation job."""


class DocumentNotFoundError(EvaluationError):
    """A document id in the job does not resolve to a stored document."""

    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found.")


class DocumentExtractionError(EvaluationError):
    """A stored document could not be opened or parsed as a PDF."""

    def __init__(self, path: str, cause: str):
        self.path = path
        super().__init__(f"Could not process PDF file: {path} ({cause})")


class IndexUnavailableError(EvaluationError):
    """The semantic index snapshot could not be loaded."""


class ResponseParseError(EvaluationError):
    """The model replied, but not with a single JSON object."""


class LLMError(EvaluationError):
    """Base class for classified failures of a single LLM API call."""


class LLMAuthError(LLMError):
    """No API key configured, or the API rejected the credentials."""


class LLMUpstreamError(LLMError):
    """The API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message)


class LLMTimeoutError(LLMError):
    """The request did not complete within the configured timeout."""


class LLMNoResponseError(LLMError):
    """Network-level failure: the request was sent but nothing came back."""


class LLMMalformedResponseError(LLMError):
    """A 2xx response without the fields the pipeline needs."""


class EvaluationNotFoundError(Exception):
    """No evaluation record exists for the requested job id."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Result for job ID {job_id} not found.")


class EnqueueError(Exception):
    """Dagster refused to launch an evaluation run."""
