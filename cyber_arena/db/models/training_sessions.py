from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from cyber_arena.db.models.base import Base


class TrainingSession(Base):
    __tablename__ = "training_sessions"
    __table_args__ = (
        CheckConstraint(
            "game_type IN ('quiz','phishing','scenario')",
            name="ck_training_sessions_game_type",
        ),
        CheckConstraint(
            "status IN ('IN_PROGRESS','COMPLETED')",
            name="ck_training_sessions_status",
        ),
        CheckConstraint(
            "item_time_budget_ms IS NULL OR item_time_budget_ms > 0",
            name="ck_training_sessions_time_budget_positive",
        ),
        Index("idx_training_sessions_user_started", "user_id", "started_at"),
        Index("idx_training_sessions_status", "status"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    game_type: Mapped[str] = mapped_column(String(16), nullable=False)
    category_filter: Mapped[str] = mapped_column(String(64), nullable=False)
    difficulty_filter: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    item_ids: Mapped[list[str]] = mapped_column(JSONB, nullable=False)
    item_time_budget_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
