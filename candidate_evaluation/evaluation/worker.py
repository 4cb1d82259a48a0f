"""Evaluation worker: drives one job through processing to completed or failed.

Pipeline for a delivered job:
1. Fail fast with "index unavailable" if the strategy's index did not load
2. Record PROCESSING
3. Resolve the CV and report document ids
4. Extract both PDFs and gather rubric context, all concurrently
5. CV evaluation, then report evaluation, then the summary (sequential: the
   summary embeds the first two results, and the first failure stops the chain)
6. Merge the three JSON objects and record COMPLETED

Any EvaluationError in steps 3-6 is recorded as FAILED with its message and
handle() returns normally. Other exceptions, including a failed record
write, escape so the queue redelivers the job.
"""

from typing import Any

from dagster import get_dagster_logger

from candidate_evaluation.config import EvaluationSettings
from candidate_evaluation.documents.lookup import DocumentReference
from candidate_evaluation.errors import EvaluationError
from candidate_evaluation.evaluation.concurrency import gather_in_order
from candidate_evaluation.evaluation.interfaces import (
    DocumentLookup,
    EvaluationJob,
    LLMCaller,
    RecordStore,
    TextExtractor,
)
from candidate_evaluation.evaluation.strategies import EvaluationStrategy
from candidate_evaluation.llm.operations import evaluate_cv, evaluate_report, summarize_evaluation
from candidate_evaluation.llm.responses import merge_results


class EvaluationWorker:
    """Consumes EvaluationJobs and owns every status transition of their records."""

    def __init__(
        self,
        documents: DocumentLookup,
        extractor: TextExtractor,
        strategy: EvaluationStrategy,
        llm: LLMCaller,
        records: RecordStore,
        settings: EvaluationSettings,
    ):
        self.documents = documents
        self.extractor = extractor
        self.strategy = strategy
        self.llm = llm
        self.records = records
        self.settings = settings

    async def handle(self, job: EvaluationJob) -> None:
        logger = get_dagster_logger()

        unavailable = self.strategy.unavailable_reason()
        if unavailable:
            logger.error(f"Index not loaded for job {job.job_id}. Cannot perform RAG.")
            self.records.mark_failed(job.job_id, unavailable)
            return

        logger.info(f"Starting {self.strategy.name} evaluation for job {job.job_id}.")
        self.records.mark_processing(job.job_id)

        try:
            result = await self._evaluate(job)
        except EvaluationError as exc:
            logger.error(f"Job {job.job_id} failed: {exc}")
            self.records.mark_failed(job.job_id, str(exc))
            return

        self.records.mark_completed(job.job_id, result)
        logger.info(f"Job {job.job_id} completed.")

    async def _evaluate(self, job: EvaluationJob) -> dict[str, Any]:
        logger = get_dagster_logger()
        cv_document = self.documents.get(job.cv_document_id)
        report_document = self.documents.get(job.report_document_id)

        # Retrieval queries do not depend on document text, so extraction and
        # retrieval overlap.
        (cv_text, report_text), (cv_context, report_context) = await gather_in_order(
            self._extract_pair(cv_document, report_document),
            self.strategy.gather_context(job.job_title),
        )
        logger.info(
            f"Job {job.job_id}: extracted {len(cv_text)} CV chars, "
            f"{len(report_text)} report chars."
        )

        max_chars = self.settings.max_document_chars

        logger.info(f"Job {job.job_id}: calling LLM for CV evaluation...")
        cv_result = await evaluate_cv(
            self.llm, cv_text, cv_context, job.job_title, max_chars=max_chars
        )

        logger.info(f"Job {job.job_id}: calling LLM for project report evaluation...")
        report_result = await evaluate_report(
            self.llm, report_text, report_context, job.job_title, max_chars=max_chars
        )

        logger.info(f"Job {job.job_id}: calling LLM for final summary...")
        summary_result = await summarize_evaluation(
            self.llm, cv_result, report_result, job.job_title
        )

        return merge_results(cv_result, report_result, summary_result)

    async def _extract_pair(
        self, cv_document: DocumentReference, report_document: DocumentReference
    ) -> tuple[str, str]:
        cv_text, report_text = await gather_in_order(
            self.extractor.aextract(cv_document.storage_path),
            self.extractor.aextract(report_document.storage_path),
        )
        return cv_text, report_text
