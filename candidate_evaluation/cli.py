"""Command line entry point: ``candidate-eval {dev,enqueue,status}``."""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from candidate_evaluation.errors import EnqueueError, EvaluationNotFoundError

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def local_dev(extra_args: list[str]) -> None:
    """Run ``dagster dev`` against the evaluation definitions."""
    os.chdir(PROJECT_ROOT)
    os.environ.setdefault("DAGSTER_HOME", str(PROJECT_ROOT))
    os.execvp(
        sys.executable,
        [sys.executable, "-m", "dagster", "dev", "-m", "candidate_evaluation.definitions"]
        + extra_args,
    )


def enqueue(args: argparse.Namespace) -> int:
    from candidate_evaluation.enqueue import enqueue_evaluation

    try:
        run_id = enqueue_evaluation(
            args.cv_document_id,
            args.report_document_id,
            args.job_title,
            graphql_url=args.url,
        )
    except EnqueueError as exc:
        print(f"  FAILED: {exc}", file=sys.stderr)
        return 1
    print(json.dumps({"id": run_id, "status": "queued"}))
    return 0


def status(args: argparse.Namespace) -> int:
    from candidate_evaluation.evaluation.status import get_evaluation_status
    from candidate_evaluation.evaluation.store import SqlRecordStore

    try:
        response = get_evaluation_status(SqlRecordStore(), args.job_id)
    except EvaluationNotFoundError as exc:
        print(f"  {exc}", file=sys.stderr)
        return 1
    print(json.dumps(response, indent=2, default=str))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="candidate-eval",
        description="Evaluate candidate CVs and project reports against a job title.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("dev", help="Start the Dagster dev server (extra args are forwarded)")

    enqueue_parser = subparsers.add_parser("enqueue", help="Queue an evaluation run")
    enqueue_parser.add_argument("cv_document_id", type=int)
    enqueue_parser.add_argument("report_document_id", type=int)
    enqueue_parser.add_argument("job_title")
    enqueue_parser.add_argument("--url", default=None, help="Dagster GraphQL URL")

    status_parser = subparsers.add_parser("status", help="Show the status of an evaluation")
    status_parser.add_argument("job_id")

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)

    if args.command == "dev":
        local_dev(extra)
        return 0
    if extra:
        parser.error(f"unrecognized arguments: {' '.join(extra)}")
    if args.command == "enqueue":
        return enqueue(args)
    return status(args)


if __name__ == "__main__":
    sys.exit(main())
