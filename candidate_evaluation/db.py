"""Centralized PostgreSQL engine factory.

The record store, the document lookup and the semantic index loader share a
single SQLAlchemy engine per process. Dagster's DefaultRunLauncher spawns one
subprocess per run, so each evaluation run gets exactly one engine.

Uses NullPool: connections are opened on demand and returned immediately
after use, so an idle worker holds no connections. A job writes its record at
most three times (processing, then completed or failed), so at most one app
connection is open at a time per run.
"""

import os
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

_lock = threading.Lock()
_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def _build_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    user = os.getenv("POSTGRES_USER", "evaluation")
    password = os.getenv("POSTGRES_PASSWORD", "evaluation_dev")
    database = os.getenv("POSTGRES_DB", "candidate_evaluation")
    return f"postgresql+psycopg://{user}:{password}@{host}:{port}/{database}"


def get_engine() -> Engine:
    """Return the process-wide SQLAlchemy engine, creating it on first call."""
    global _engine, _session_factory
    if _engine is None:
        with _lock:
            if _engine is None:
                _engine = create_engine(_build_url(), poolclass=NullPool)
                _session_factory = sessionmaker(bind=_engine)
    return _engine


def get_session() -> Session:
    """Create a new session from the shared engine."""
    get_engine()
    return _session_factory()
