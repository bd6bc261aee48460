from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.models.training_results import TrainingResult


@dataclass(frozen=True, slots=True)
class UserScoreRollup:
    user_id: str
    total_score: int
    games_played: int
    best_score: int
    last_played: datetime


class TrainingResultsRepo:
    @staticmethod
    async def get_by_session_id(session: AsyncSession, *, session_id: UUID) -> TrainingResult | None:
        stmt = select(TrainingResult).where(TrainingResult.session_id == session_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, result_row: TrainingResult) -> TrainingResult:
        session.add(result_row)
        await session.flush()
        return result_row

    @staticmethod
    async def list_completed(session: AsyncSession) -> list[TrainingResult]:
        stmt = select(TrainingResult).order_by(
            TrainingResult.completed_at.asc(),
            TrainingResult.id.asc(),
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def rollup_scores_by_user(
        session: AsyncSession,
        *,
        game_type: str | None = None,
    ) -> list[UserScoreRollup]:
        stmt = select(
            TrainingResult.user_id,
            func.sum(TrainingResult.score),
            func.count(TrainingResult.id),
            func.max(TrainingResult.score),
            func.max(TrainingResult.completed_at),
        ).group_by(TrainingResult.user_id)
        if game_type is not None:
            stmt = stmt.where(TrainingResult.game_type == game_type)
        result = await session.execute(stmt)
        return [
            UserScoreRollup(
                user_id=str(user_id),
                total_score=int(total_score or 0),
                games_played=int(games_played or 0),
                best_score=int(best_score or 0),
                last_played=last_played,
            )
            for user_id, total_score, games_played, best_score, last_played in result.all()
        ]
