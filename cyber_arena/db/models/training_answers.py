from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from cyber_arena.db.models.base import Base


class TrainingAnswer(Base):
    __tablename__ = "training_answers"
    __table_args__ = (
        CheckConstraint("elapsed_ms >= 0", name="ck_training_answers_elapsed_non_negative"),
        CheckConstraint("position >= 0", name="ck_training_answers_position_non_negative"),
        Index("uq_training_answers_session_position", "session_id", "position", unique=True),
        Index("uq_training_answers_session_item", "session_id", "item_id", unique=True),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    session_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("training_sessions.id"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    item_id: Mapped[str] = mapped_column(String(64), nullable=False)
    answer: Mapped[object] = mapped_column(JSONB, nullable=False)
    elapsed_ms: Mapped[int] = mapped_column(Integer, nullable=False)
    answered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
