"""LLM operation modules.

Each module contains:
- PROMPT_VERSION: Bump when the prompt changes
- An async function that performs the operation through an LLMCaller
"""

from candidate_evaluation.llm.operations.evaluate_document import (
    PROMPT_VERSION as EVALUATION_PROMPT_VERSION,
)
from candidate_evaluation.llm.operations.evaluate_document import (
    evaluate_cv,
    evaluate_document,
    evaluate_report,
)
from candidate_evaluation.llm.operations.summarize_evaluation import (
    PROMPT_VERSION as SUMMARY_PROMPT_VERSION,
)
from candidate_evaluation.llm.operations.summarize_evaluation import (
    summarize_evaluation,
)

__all__ = [
    "EVALUATION_PROMPT_VERSION",
    "evaluate_document",
    "evaluate_cv",
    "evaluate_report",
    "SUMMARY_PROMPT_VERSION",
    "summarize_evaluation",
]
