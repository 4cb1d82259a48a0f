"""Dagster definitions for the candidate evaluation pipeline.

This module is the entry point for Dagster. It wires together:
- The evaluation job (one run per evaluation request)
- Resources (settings, OpenRouter for LLM + embeddings, semantic index)
- Sensors (failed-run tagging)
"""

from dagster import Definitions
from dotenv import load_dotenv

from candidate_evaluation.config import EvaluationSettings
from candidate_evaluation.jobs import evaluation_job
from candidate_evaluation.resources import OpenRouterResource, SemanticIndexResource
from candidate_evaluation.sensors import run_failure_tagger

# Load environment variables from .env file (must be before resource initialization)
load_dotenv()


def get_resources() -> dict:
    """Build the resources once; the worker receives them by reference."""
    settings = EvaluationSettings()
    openrouter = OpenRouterResource()
    return {
        "settings": settings,
        "openrouter": openrouter,
        "semantic_index": SemanticIndexResource(
            openrouter=openrouter, enabled=settings.uses_index
        ),
    }


all_jobs = [evaluation_job]

all_sensors = [run_failure_tagger]

defs = Definitions(
    jobs=all_jobs,
    resources=get_resources(),
    sensors=all_sensors,
)
