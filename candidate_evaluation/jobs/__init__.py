"""Dagster job that consumes evaluation requests.

Each evaluation request is one Dagster run of ``evaluation_job``; the run id
is the evaluation job id. Dagster's run queue plays the job queue:

- Delivery: the run launcher starts the ``evaluate_candidate`` op with the
  request as op config.
- Redelivery: an exception escaping the op is retried by the op retry
  policy, up to three attempts with exponential backoff starting at 5s.
  Retries stay inside the same run, so the job id (and the record it owns)
  does not change.
- Business failures (missing document, bad PDF, LLM errors) are recorded as
  ``failed`` by the worker and the op succeeds, so they are never retried.

USAGE:
    candidate-eval enqueue <cv_document_id> <report_document_id> "Backend Engineer"
    candidate-eval status <run_id>
"""

import asyncio

from dagster import (
    Backoff,
    Config,
    Jitter,
    OpExecutionContext,
    RetryPolicy,
    job,
    op,
)

from candidate_evaluation.config import EvaluationSettings
from candidate_evaluation.documents.extract_pdf import PyMuPDFTextExtractor
from candidate_evaluation.documents.lookup import SqlDocumentLookup
from candidate_evaluation.evaluation.interfaces import (
    DocumentLookup,
    EvaluationJob,
    RecordStore,
    TextExtractor,
)
from candidate_evaluation.evaluation.store import SqlRecordStore
from candidate_evaluation.evaluation.strategies import build_strategy
from candidate_evaluation.evaluation.worker import EvaluationWorker
from candidate_evaluation.resources.openrouter import OpenRouterResource
from candidate_evaluation.resources.semantic_index import SemanticIndexResource

EVALUATION_JOB_NAME = "evaluation_job"
EVALUATION_OP_NAME = "evaluate_candidate"

# Redelivery policy for infrastructure failures (crashes, database errors)
# Three attempts in total: 5s, then 10s between retries, with jitter
evaluation_retry_policy = RetryPolicy(
    max_retries=2,
    delay=5,
    backoff=Backoff.EXPONENTIAL,
    jitter=Jitter.PLUS_MINUS,
)


class EvaluationRequestConfig(Config):
    """Payload of an evaluation request."""

    cv_document_id: int
    report_document_id: int
    job_title: str


def build_worker(
    settings: EvaluationSettings,
    openrouter: OpenRouterResource,
    semantic_index: SemanticIndexResource | None = None,
    records: RecordStore | None = None,
    documents: DocumentLookup | None = None,
    extractor: TextExtractor | None = None,
) -> EvaluationWorker:
    """Wire the production collaborators into an EvaluationWorker."""
    index = semantic_index.index if semantic_index is not None else None
    load_error = semantic_index.load_error if semantic_index is not None else None
    return EvaluationWorker(
        documents=documents if documents is not None else SqlDocumentLookup(),
        extractor=extractor if extractor is not None else PyMuPDFTextExtractor(),
        strategy=build_strategy(settings, index=index, load_error=load_error),
        llm=openrouter,
        records=records if records is not None else SqlRecordStore(),
        settings=settings,
    )


@op(
    name=EVALUATION_OP_NAME,
    description=(
        "Evaluate a candidate CV and project report against the job title: "
        "extract PDFs → retrieve rubric context → CV / report / summary LLM calls → "
        "store the merged result."
    ),
    retry_policy=evaluation_retry_policy,
)
def evaluate_candidate(
    context: OpExecutionContext,
    config: EvaluationRequestConfig,
    settings: EvaluationSettings,
    openrouter: OpenRouterResource,
    semantic_index: SemanticIndexResource,
) -> None:
    evaluation_job_request = EvaluationJob(
        job_id=context.run_id,
        cv_document_id=config.cv_document_id,
        report_document_id=config.report_document_id,
        job_title=config.job_title,
    )
    context.log.info(
        f"Delivered evaluation {evaluation_job_request.job_id} "
        f"(attempt {context.retry_number + 1}/{evaluation_retry_policy.max_retries + 1}): "
        f"cv={config.cv_document_id} report={config.report_document_id} "
        f"title={config.job_title!r}"
    )
    worker = build_worker(settings, openrouter, semantic_index)
    asyncio.run(worker.handle(evaluation_job_request))


@job(
    name=EVALUATION_JOB_NAME,
    description="Evaluate one candidate (CV + project report) for a job title.",
)
def evaluation_job():
    evaluate_candidate()
