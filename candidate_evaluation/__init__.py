"""Candidate evaluation pipeline: CV + project report scoring with RAG and OpenRouter."""
