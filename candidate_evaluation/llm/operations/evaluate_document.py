"""CV and project report evaluation LLM operations.

Each call renders one document prompt, sends it to the model in JSON mode and
parses the reply into a dict.

Bump PROMPT_VERSION when changing the prompt or output schemas.
"""

from typing import TYPE_CHECKING, Any

from candidate_evaluation.config import DEFAULT_MAX_DOCUMENT_CHARS
from candidate_evaluation.llm.prompts import (
    CV_OUTPUT_SCHEMA,
    REPORT_OUTPUT_SCHEMA,
    build_document_prompt,
)
from candidate_evaluation.llm.responses import parse_json_object

if TYPE_CHECKING:
    from candidate_evaluation.evaluation.interfaces import LLMCaller

# Bump this version when the prompt changes
# Format: MAJOR.MINOR.PATCH
# - MAJOR: Breaking changes to output schema
# - MINOR: New fields or significant prompt improvements
# - PATCH: Minor wording tweaks or bug fixes
PROMPT_VERSION = "1.0.0"


async def evaluate_document(
    llm: "LLMCaller",
    doc_type: str,
    doc_text: str,
    context: str | None,
    job_title: str,
    output_schema_example: str,
    operation: str,
    max_chars: int = DEFAULT_MAX_DOCUMENT_CHARS,
) -> dict[str, Any]:
    """Evaluate one document and return the parsed JSON object."""
    prompt = build_document_prompt(
        doc_type, doc_text, context, job_title, output_schema_example, max_chars=max_chars
    )
    raw = await llm.generate(prompt, operation=operation)
    return parse_json_object(raw, f"{doc_type} evaluation")


async def evaluate_cv(
    llm: "LLMCaller",
    cv_text: str,
    context: str | None,
    job_title: str,
    max_chars: int = DEFAULT_MAX_DOCUMENT_CHARS,
) -> dict[str, Any]:
    """Score a CV against the role: cv_match_rate (0-1) and cv_feedback."""
    return await evaluate_document(
        llm,
        "CV",
        cv_text,
        context,
        job_title,
        CV_OUTPUT_SCHEMA,
        operation="evaluate_cv",
        max_chars=max_chars,
    )


async def evaluate_report(
    llm: "LLMCaller",
    report_text: str,
    context: str | None,
    job_title: str,
    max_chars: int = DEFAULT_MAX_DOCUMENT_CHARS,
) -> dict[str, Any]:
    """Score a project report: project_score (1-5) and project_feedback."""
    return await evaluate_document(
        llm,
        "Project Report",
        report_text,
        context,
        job_title,
        REPORT_OUTPUT_SCHEMA,
        operation="evaluate_report",
        max_chars=max_chars,
    )
