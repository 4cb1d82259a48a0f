"""Dagster sensors for the candidate evaluation pipeline."""

from candidate_evaluation.sensors.run_failure_sensor import run_failure_tagger

__all__ = ["run_failure_tagger"]
