from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from cyber_arena.db.models.base import Base


class TrainingResult(Base):
    __tablename__ = "training_results"
    __table_args__ = (
        CheckConstraint(
            "game_type IN ('quiz','phishing','scenario')",
            name="ck_training_results_game_type",
        ),
        CheckConstraint("score >= 0", name="ck_training_results_score_non_negative"),
        CheckConstraint(
            "correct_count >= 0 AND correct_count <= total_items",
            name="ck_training_results_correct_count_range",
        ),
        CheckConstraint(
            "total_elapsed_seconds >= 0",
            name="ck_training_results_elapsed_non_negative",
        ),
        Index("idx_training_results_user_completed", "user_id", "completed_at"),
        Index("idx_training_results_game_type_completed", "game_type", "completed_at"),
        Index("idx_training_results_completed", "completed_at"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    session_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("training_sessions.id"),
        unique=True,
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    game_type: Mapped[str] = mapped_column(String(16), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    correct_count: Mapped[int] = mapped_column(Integer, nullable=False)
    total_items: Mapped[int] = mapped_column(Integer, nullable=False)
    total_elapsed_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    item_outcomes: Mapped[list[dict[str, object]]] = mapped_column(JSONB, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
