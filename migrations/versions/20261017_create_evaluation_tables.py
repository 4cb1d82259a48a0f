"""Create documents, evaluation_results and rubric_passages.

Revision ID: 20261017_eval_tables
Revises:
Create Date: 2026-10-17

- documents: uploaded CV / project report PDFs (written by the upload API)
- evaluation_results: one row per evaluation job, unique on job_id
- rubric_passages: embedded reference chunks loaded by the semantic index
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from pgvector.sqlalchemy import Vector
from sqlalchemy.dialects import postgresql

revision: str = "20261017_eval_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

EVALUATION_STATUS_VALUES = ("queued", "processing", "completed", "failed")


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS vector")

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("original_name", sa.String(255), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("path", sa.Text(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
    )

    evaluation_status = postgresql.ENUM(
        *EVALUATION_STATUS_VALUES, name="evaluation_status_enum"
    )
    evaluation_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "evaluation_results",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("job_id", sa.String(100), nullable=False, unique=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                *EVALUATION_STATUS_VALUES, name="evaluation_status_enum", create_type=False
            ),
            nullable=False,
            server_default="queued",
        ),
        sa.Column("result", postgresql.JSONB(), nullable=True),
        sa.Column("attempt", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
    )

    op.create_table(
        "rubric_passages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("source", sa.String(255), nullable=False),
        sa.Column("chunk_index", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("embedding", Vector(1536), nullable=False),
        sa.Column("model_version", sa.String(100), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
        sa.UniqueConstraint("source", "chunk_index", name="uq_rubric_passages_source_chunk"),
    )


def downgrade() -> None:
    op.drop_table("rubric_passages")
    op.drop_table("evaluation_results")
    postgresql.ENUM(name="evaluation_status_enum").drop(op.get_bind(), checkfirst=True)
    op.drop_table("documents")
