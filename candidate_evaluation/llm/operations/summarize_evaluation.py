"""Overall candidate summary LLM operation.

Runs after the CV and report evaluations and embeds their parsed results.

Bump PROMPT_VERSION when changing the prompt.
"""

from typing import TYPE_CHECKING, Any

from candidate_evaluation.llm.prompts import build_summary_prompt
from candidate_evaluation.llm.responses import parse_json_object

if TYPE_CHECKING:
    from candidate_evaluation.evaluation.interfaces import LLMCaller

# Bump this version when the prompt changes
PROMPT_VERSION = "1.0.0"


async def summarize_evaluation(
    llm: "LLMCaller",
    cv_result: dict[str, Any],
    report_result: dict[str, Any],
    job_title: str,
) -> dict[str, Any]:
    """Return {"overall_summary": ...} for the candidate."""
    prompt = build_summary_prompt(cv_result, report_result, job_title)
    raw = await llm.generate(prompt, operation="summarize_evaluation")
    return parse_json_object(raw, "overall summary")
