"""training_core

Revision ID: 5e1a7c3b9d20
Revises:
Create Date: 2026-10-17 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "5e1a7c3b9d20"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "training_items",
        sa.Column("item_id", sa.String(64), primary_key=True),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("difficulty", sa.String(16), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("payload", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("kind IN ('quiz','phishing','scenario')", name="ck_training_items_kind"),
        sa.CheckConstraint(
            "difficulty IN ('easy','medium','hard')",
            name="ck_training_items_difficulty",
        ),
        sa.CheckConstraint("status IN ('ACTIVE','DISABLED')", name="ck_training_items_status"),
    )
    op.create_index("idx_training_items_kind_status", "training_items", ["kind", "status"])
    op.create_index(
        "idx_training_items_kind_category_difficulty",
        "training_items",
        ["kind", "category", "difficulty"],
    )

    op.create_table(
        "training_sessions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("game_type", sa.String(16), nullable=False),
        sa.Column("category_filter", sa.String(64), nullable=False),
        sa.Column("difficulty_filter", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("item_ids", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("item_time_budget_ms", sa.Integer(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "game_type IN ('quiz','phishing','scenario')",
            name="ck_training_sessions_game_type",
        ),
        sa.CheckConstraint(
            "status IN ('IN_PROGRESS','COMPLETED')",
            name="ck_training_sessions_status",
        ),
        sa.CheckConstraint(
            "item_time_budget_ms IS NULL OR item_time_budget_ms > 0",
            name="ck_training_sessions_time_budget_positive",
        ),
    )
    op.create_index(
        "idx_training_sessions_user_started",
        "training_sessions",
        ["user_id", "started_at"],
    )
    op.create_index("idx_training_sessions_status", "training_sessions", ["status"])

    op.create_table(
        "training_answers",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("session_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("item_id", sa.String(64), nullable=False),
        sa.Column("answer", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("elapsed_ms", sa.Integer(), nullable=False),
        sa.Column("answered_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("elapsed_ms >= 0", name="ck_training_answers_elapsed_non_negative"),
        sa.CheckConstraint("position >= 0", name="ck_training_answers_position_non_negative"),
        sa.ForeignKeyConstraint(["session_id"], ["training_sessions.id"]),
    )
    op.create_index(
        "uq_training_answers_session_position",
        "training_answers",
        ["session_id", "position"],
        unique=True,
    )
    op.create_index(
        "uq_training_answers_session_item",
        "training_answers",
        ["session_id", "item_id"],
        unique=True,
    )

    op.create_table(
        "training_results",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("session_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("game_type", sa.String(16), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("correct_count", sa.Integer(), nullable=False),
        sa.Column("total_items", sa.Integer(), nullable=False),
        sa.Column("total_elapsed_seconds", sa.Integer(), nullable=False),
        sa.Column("item_outcomes", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "game_type IN ('quiz','phishing','scenario')",
            name="ck_training_results_game_type",
        ),
        sa.CheckConstraint("score >= 0", name="ck_training_results_score_non_negative"),
        sa.CheckConstraint(
            "correct_count >= 0 AND correct_count <= total_items",
            name="ck_training_results_correct_count_range",
        ),
        sa.CheckConstraint(
            "total_elapsed_seconds >= 0",
            name="ck_training_results_elapsed_non_negative",
        ),
        sa.ForeignKeyConstraint(["session_id"], ["training_sessions.id"]),
        sa.UniqueConstraint("session_id", name="uq_training_results_session_id"),
    )
    op.create_index(
        "idx_training_results_user_completed",
        "training_results",
        ["user_id", "completed_at"],
    )
    op.create_index(
        "idx_training_results_game_type_completed",
        "training_results",
        ["game_type", "completed_at"],
    )
    op.create_index("idx_training_results_completed", "training_results", ["completed_at"])


def downgrade() -> None:
    op.drop_index("idx_training_results_completed", table_name="training_results")
    op.drop_index("idx_training_results_game_type_completed", table_name="training_results")
    op.drop_index("idx_training_results_user_completed", table_name="training_results")
    op.drop_table("training_results")

    op.drop_index("uq_training_answers_session_item", table_name="training_answers")
    op.drop_index("uq_training_answers_session_position", table_name="training_answers")
    op.drop_table("training_answers")

    op.drop_index("idx_training_sessions_status", table_name="training_sessions")
    op.drop_index("idx_training_sessions_user_started", table_name="training_sessions")
    op.drop_table("training_sessions")

    op.drop_index(
        "idx_training_items_kind_category_difficulty",
        table_name="training_items",
    )
    op.drop_index("idx_training_items_kind_status", table_name="training_items")
    op.drop_table("training_items")
