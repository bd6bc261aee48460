from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cyber_arena.db.models.base import Base


class TrainingItem(Base):
    __tablename__ = "training_items"
    __table_args__ = (
        CheckConstraint(
            "kind IN ('quiz','phishing','scenario')",
            name="ck_training_items_kind",
        ),
        CheckConstraint(
            "difficulty IN ('easy','medium','hard')",
            name="ck_training_items_difficulty",
        ),
        CheckConstraint(
            "status IN ('ACTIVE','DISABLED')",
            name="ck_training_items_status",
        ),
        Index("idx_training_items_kind_status", "kind", "status"),
        Index("idx_training_items_kind_category_difficulty", "kind", "category", "difficulty"),
    )

    item_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    payload: Mapped[dict[str, object]] = mapped_column(JSONB, nullable=False)
    explanation: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
