"""Dagster resource that loads the semantic index once per run process."""

from dagster import ConfigurableResource, InitResourceContext, get_dagster_logger
from pydantic import Field, PrivateAttr

from candidate_evaluation.db import get_session
from candidate_evaluation.errors import IndexUnavailableError
from candidate_evaluation.resources.openrouter import OpenRouterResource
from candidate_evaluation.retrieval.index import SemanticIndex, load_semantic_index


class SemanticIndexResource(ConfigurableResource):
    """Holds the loaded SemanticIndex, or the reason it could not be loaded.

    A load failure is kept rather than raised: the worker then fails every job
    fast with "index unavailable" instead of the run crashing and being
    retried against the same missing snapshot.
    """

    openrouter: OpenRouterResource
    enabled: bool = Field(
        default=True,
        description="Load rubric_passages at setup; off for the direct strategy",
    )

    _index: SemanticIndex | None = PrivateAttr(default=None)
    _load_error: str | None = PrivateAttr(default=None)

    def setup_for_execution(self, context: InitResourceContext) -> None:
        if not self.enabled:
            get_dagster_logger().info("Semantic index disabled; skipping load.")
            return
        self.load()

    def load(self) -> None:
        logger = get_dagster_logger()
        logger.info("Loading semantic index from rubric_passages...")
        session = get_session()
        try:
            self._index = load_semantic_index(session, self.openrouter.embed_query)
            self._load_error = None
        except IndexUnavailableError as exc:
            self._index = None
            self._load_error = str(exc)
            logger.error(f"Failed to load semantic index: {exc}")
        finally:
            session.close()
        if self._index is not None:
            logger.info(f"Loaded semantic index with {len(self._index)} passages.")

    @property
    def index(self) -> SemanticIndex | None:
        return self._index

    @property
    def load_error(self) -> str | None:
        return self._load_error
