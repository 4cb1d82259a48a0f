#!/usr/bin/env python3
"""Run one evaluation in-process, without Dagster: resolve → extract → retrieve → score.

Usage:
    poetry run python scripts/run_evaluation.py 1 2 "Backend Engineer"
    poetry run python scripts/run_evaluation.py 1 2 "Backend Engineer" --direct
    poetry run python scripts/run_evaluation.py 1 2 "Backend Engineer" --dry-run

--direct skips rubric retrieval; --dry-run keeps the record in memory instead
of writing evaluation_results.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from uuid import uuid4

from dotenv import load_dotenv

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
load_dotenv()

from candidate_evaluation.config import EvaluationSettings  # noqa: E402
from candidate_evaluation.evaluation.interfaces import EvaluationJob  # noqa: E402
from candidate_evaluation.evaluation.status import get_evaluation_status  # noqa: E402
from candidate_evaluation.evaluation.store import InMemoryRecordStore, SqlRecordStore  # noqa: E402
from candidate_evaluation.jobs import build_worker  # noqa: E402
from candidate_evaluation.models.enums import EvaluationStrategyEnum  # noqa: E402
from candidate_evaluation.resources.openrouter import OpenRouterResource  # noqa: E402
from candidate_evaluation.resources.semantic_index import SemanticIndexResource  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("cv_document_id", type=int)
    parser.add_argument("report_document_id", type=int)
    parser.add_argument("job_title")
    parser.add_argument("--direct", action="store_true", help="Skip rubric retrieval")
    parser.add_argument("--dry-run", action="store_true", help="Do not write evaluation_results")
    args = parser.parse_args()

    settings = EvaluationSettings(
        strategy=EvaluationStrategyEnum.DIRECT if args.direct else EvaluationStrategyEnum.RAG
    )
    openrouter = OpenRouterResource()
    semantic_index = None
    if settings.uses_index:
        semantic_index = SemanticIndexResource(openrouter=openrouter)
        semantic_index.load()

    records = InMemoryRecordStore() if args.dry_run else SqlRecordStore()
    worker = build_worker(settings, openrouter, semantic_index, records=records)

    job = EvaluationJob(
        job_id=f"local-{uuid4().hex[:12]}",
        cv_document_id=args.cv_document_id,
        report_document_id=args.report_document_id,
        job_title=args.job_title,
    )
    asyncio.run(worker.handle(job))
    print(json.dumps(get_evaluation_status(records, job.job_id), indent=2, default=str))


if __name__ == "__main__":
    main()
