"""Enqueue evaluation requests by launching Dagster runs over GraphQL.

The run id returned by Dagster is the evaluation job id that status queries
use. The upload API calls enqueue_evaluation after storing both documents.
"""

import os
from typing import Any

import httpx

from candidate_evaluation.errors import EnqueueError
from candidate_evaluation.jobs import EVALUATION_JOB_NAME, EVALUATION_OP_NAME

DEFAULT_GRAPHQL_URL = "http://localhost:3000/graphql"
DEFAULT_LOCATION_NAME = "candidate_evaluation.definitions"
DEFAULT_REPOSITORY_NAME = "__repository__"

LAUNCH_RUN_MUTATION = """
mutation LaunchEvaluation($executionParams: ExecutionParams!) {
  launchRun(executionParams: $executionParams) {
    __typename
    ... on LaunchRunSuccess {
      run { runId }
    }
    ... on RunConfigValidationInvalid {
      errors { message }
    }
    ... on PipelineNotFoundError {
      message
    }
    ... on PythonError {
      message
    }
  }
}
"""


def build_run_config(
    cv_document_id: int, report_document_id: int, job_title: str
) -> dict[str, Any]:
    """Run config carrying the request payload to the evaluate_candidate op."""
    return {
        "ops": {
            EVALUATION_OP_NAME: {
                "config": {
                    "cv_document_id": cv_document_id,
                    "report_document_id": report_document_id,
                    "job_title": job_title,
                }
            }
        }
    }


def _launch_error_message(result: dict[str, Any]) -> str:
    typename = result.get("__typename", "UnknownResult")
    if result.get("errors"):
        details = "; ".join(e.get("message", "") for e in result["errors"])
        return f"{typename}: {details}"
    return f"{typename}: {result.get('message', 'no message')}"


def enqueue_evaluation(
    cv_document_id: int,
    report_document_id: int,
    job_title: str,
    graphql_url: str | None = None,
    location_name: str | None = None,
    client: httpx.Client | None = None,
    timeout: float = 30.0,
) -> str:
    """Launch an evaluation run and return its run id (the evaluation job id).

    Raises:
        EnqueueError: Dagster is unreachable or rejected the launch
    """
    url = graphql_url or os.getenv("DAGSTER_GRAPHQL_URL", DEFAULT_GRAPHQL_URL)
    variables = {
        "executionParams": {
            "selector": {
                "repositoryLocationName": location_name
                or os.getenv("DAGSTER_LOCATION_NAME", DEFAULT_LOCATION_NAME),
                "repositoryName": DEFAULT_REPOSITORY_NAME,
                "jobName": EVALUATION_JOB_NAME,
            },
            "runConfigData": build_run_config(cv_document_id, report_document_id, job_title),
        }
    }
    payload = {"query": LAUNCH_RUN_MUTATION, "variables": variables}

    try:
        if client is not None:
            response = client.post(url, json=payload, timeout=timeout)
        else:
            response = httpx.post(url, json=payload, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise EnqueueError(f"Could not reach Dagster at {url}: {exc}") from exc

    if data.get("errors"):
        raise EnqueueError(f"GraphQL error: {data['errors'][0].get('message')}")

    result = (data.get("data") or {}).get("launchRun") or {}
    if result.get("__typename") != "LaunchRunSuccess":
        raise EnqueueError(f"Dagster rejected the evaluation run: {_launch_error_message(result)}")
    return result["run"]["runId"]
