"""LLM prompts, response parsing and operations for candidate evaluation.

Prompts are versioned per operation module so a change in wording can be
traced in stored results.
"""

from candidate_evaluation.llm.operations import (
    EVALUATION_PROMPT_VERSION,
    SUMMARY_PROMPT_VERSION,
    evaluate_cv,
    evaluate_report,
    summarize_evaluation,
)
from candidate_evaluation.llm.prompts import build_document_prompt, build_summary_prompt
from candidate_evaluation.llm.responses import merge_results, parse_json_object

__all__ = [
    "EVALUATION_PROMPT_VERSION",
    "SUMMARY_PROMPT_VERSION",
    "evaluate_cv",
    "evaluate_report",
    "summarize_evaluation",
    "build_document_prompt",
    "build_summary_prompt",
    "merge_results",
    "parse_json_object",
]
