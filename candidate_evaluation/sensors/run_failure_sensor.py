"""Run failure sensor that tags failed evaluation runs with a failure category.

A run only fails when an exception escaped the worker on every attempt, i.e.
an infrastructure fault rather than a recorded business failure. Known
faults get a specific tag; unknown ones get UNKNOWN_FAILURE so they surface
for investigation.
"""

import dagster as dg

FAILURE_TAG = "failure_type"

KNOWN_FAILURES: list[tuple[str, list[str]]] = [
    (
        "DATABASE_ERROR",
        ["OperationalError", "psycopg", "could not connect to server", "Connection refused"],
    ),
    (
        "RECORD_WRITE_FAILED",
        ["evaluation_results", "IntegrityError", "InvalidTextRepresentation"],
    ),
    (
        "INDEX_LOAD_FAILED",
        ["rubric_passages", "index unavailable"],
    ),
    (
        "OPENROUTER_API_ERROR",
        ["openrouter.ai", "OpenRouter API", "HTTPStatusError"],
    ),
    (
        "RATE_LIMIT",
        ["429", "Too Many Requests", "rate limit"],
    ),
    (
        "PDF_INVALID",
        ["FileDataError", "Failed to open stream", "FzErrorFormat"],
    ),
    (
        "INVALID_RUN_CONFIG",
        ["DagsterInvalidConfigError", "RunConfigValidationInvalid"],
    ),
]


def _classify_failure(error_str: str) -> list[str]:
    """Return all matching failure tags for the given error string."""
    tags = []
    for tag, patterns in KNOWN_FAILURES:
        if any(p.lower() in error_str.lower() for p in patterns):
            tags.append(tag)
    return tags


@dg.run_failure_sensor(
    name="run_failure_tagger",
    description=(
        "Tags failed evaluation runs with classified failure reasons. "
        "Known failures get a specific tag; unknown failures get UNKNOWN_FAILURE."
    ),
    default_status=dg.DefaultSensorStatus.RUNNING,
)
def run_failure_tagger(context: dg.RunFailureSensorContext):
    run_id = context.dagster_run.run_id
    job_name = context.dagster_run.job_name

    all_tags: set[str] = set()

    for event in context.get_step_failure_events():
        failure_data = event.step_failure_data
        if failure_data is None:
            continue
        error = failure_data.error
        if error is None:
            continue

        all_tags.update(_classify_failure(error.to_string()))

    if not all_tags:
        pipeline_error = context.failure_event.pipeline_failure_data.error
        if pipeline_error is not None:
            all_tags.update(_classify_failure(pipeline_error.to_string()))

    if not all_tags:
        all_tags.add("UNKNOWN_FAILURE")

    tag_value = ", ".join(sorted(all_tags))
    context.instance.add_run_tags(run_id, {FAILURE_TAG: tag_value})

    context.log.info(f"Tagged failed run {run_id} ({job_name}) with {FAILURE_TAG}={tag_value}")
