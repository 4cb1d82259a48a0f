"""Prompt construction for document evaluation and the final summary.

Both builders are pure: the same inputs always render the same prompt.
The prompts demand a bare JSON object; the response parser does not try to
dig JSON out of surrounding prose.
"""

import json
from typing import Any

from candidate_evaluation.config import DEFAULT_MAX_DOCUMENT_CHARS

CV_OUTPUT_SCHEMA = (
    '{ "cv_match_rate": number(0.0-1.0), "cv_feedback": string(2-3 sentences) }'
)
REPORT_OUTPUT_SCHEMA = (
    '{ "project_score": number(1.0-5.0), "project_feedback": string(2-3 sentences) }'
)
SUMMARY_OUTPUT_SCHEMA = '{ "overall_summary": string(2-3 sentences) }'


def truncate_document(doc_text: str, max_chars: int = DEFAULT_MAX_DOCUMENT_CHARS) -> str:
    """Keep only the first max_chars characters.

    Lossy on purpose: bounds prompt size and therefore model cost and latency.
    """
    return doc_text[:max_chars]


def build_document_prompt(
    doc_type: str,
    doc_text: str,
    context: str | None,
    job_title: str,
    output_schema_example: str,
    max_chars: int = DEFAULT_MAX_DOCUMENT_CHARS,
) -> str:
    """Render the evaluation prompt for one candidate document.

    Args:
        doc_type: Human label of the document ("CV", "Project Report")
        doc_text: Extracted document text (truncated to max_chars)
        context: Formatted rubric context, or None to prompt without context
        job_title: Role the candidate applied for
        output_schema_example: JSON shape the model must answer with
        max_chars: Truncation bound for doc_text
    """
    sections = [
        f'You are an expert HR analyst tasked with evaluating a candidate\'s {doc_type} '
        f'for the position of "{job_title}".',
    ]
    if context is not None:
        sections.append(
            "Carefully review the following CONTEXT retrieved from internal documents "
            "(like Job Description, Scoring Rubrics, Case Study Brief):\n"
            f"CONTEXT:\n{context}"
        )
    sections.append(
        f"Now, analyze the candidate's actual {doc_type} provided below:\n"
        f"CANDIDATE DOCUMENT TEXT:\n{truncate_document(doc_text, max_chars)}"
    )
    if context is not None:
        sections.append(
            "Based *strictly* on comparing the CANDIDATE DOCUMENT TEXT against the provided "
            "CONTEXT, provide your evaluation."
        )
    else:
        sections.append(
            f'Based on the CANDIDATE DOCUMENT TEXT and typical expectations for a "{job_title}", '
            "provide your evaluation."
        )
    sections.append(
        "Your response MUST be ONLY a single, valid JSON object matching this exact format: "
        f"{output_schema_example}\n"
        "Do not include any text before or after the JSON object."
    )
    return "\n\n".join(sections)


def build_summary_prompt(
    cv_result: dict[str, Any],
    report_result: dict[str, Any],
    job_title: str,
) -> str:
    """Render the summary prompt; it embeds both parsed evaluations verbatim."""
    return (
        "Based on the previous evaluations:\n"
        f"CV Evaluation: {json.dumps(cv_result, ensure_ascii=False)}\n"
        f"Project Report Evaluation: {json.dumps(report_result, ensure_ascii=False)}\n\n"
        "Please provide a concise overall summary (2-3 sentences) about the candidate's "
        f'suitability for the "{job_title}" role.\n'
        "Respond ONLY with a valid JSON object matching this exact format: "
        f"{SUMMARY_OUTPUT_SCHEMA}\n"
        "Do not include any text before or after the JSON object."
    )
