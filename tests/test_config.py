"""Tests for settings and database URL defaults."""

from candidate_evaluation.config import (
    DEFAULT_MAX_DOCUMENT_CHARS,
    DEFAULT_SIMILARITY_TOP_K,
    EvaluationSettings,
)
from candidate_evaluation.db import _build_url
from candidate_evaluation.models.enums import EvaluationStrategyEnum
from candidate_evaluation.resources.openrouter import DEFAULT_MODEL, OpenRouterResource


class TestEvaluationSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EVALUATION_STRATEGY", raising=False)
        monkeypatch.delenv("EVALUATION_TOP_K", raising=False)

        settings = EvaluationSettings()

        assert settings.strategy == EvaluationStrategyEnum.RAG
        assert settings.similarity_top_k == DEFAULT_SIMILARITY_TOP_K
        assert settings.max_document_chars == DEFAULT_MAX_DOCUMENT_CHARS == 4000
        assert settings.uses_index

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("EVALUATION_STRATEGY", "Direct")
        monkeypatch.setenv("EVALUATION_TOP_K", "5")

        settings = EvaluationSettings()

        assert settings.strategy == EvaluationStrategyEnum.DIRECT
        assert settings.similarity_top_k == 5
        assert not settings.uses_index


class TestOpenRouterDefaults:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")
        monkeypatch.delenv("OPENROUTER_MODEL", raising=False)

        resource = OpenRouterResource()

        assert resource.api_key == "sk-or-test"
        assert resource.default_model == DEFAULT_MODEL
        assert resource.temperature == 0.2
        assert resource.timeout_seconds == 60.0


class TestDatabaseUrl:
    def test_database_url_wins(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@db:5432/x")
        assert _build_url() == "postgresql+psycopg://u:p@db:5432/x"

    def test_built_from_postgres_vars(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("POSTGRES_HOST", "db")
        monkeypatch.setenv("POSTGRES_PORT", "6543")
        monkeypatch.setenv("POSTGRES_USER", "eval")
        monkeypatch.setenv("POSTGRES_PASSWORD", "secret")
        monkeypatch.setenv("POSTGRES_DB", "evals")

        assert _build_url() == "postgresql+psycopg://eval:secret@db:6543/evals"
