from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.models.training_answers import TrainingAnswer


class TrainingAnswersRepo:
    @staticmethod
    async def list_for_session(session: AsyncSession, *, session_id: UUID) -> list[TrainingAnswer]:
        stmt = (
            select(TrainingAnswer)
            .where(TrainingAnswer.session_id == session_id)
            .order_by(TrainingAnswer.position.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def create(session: AsyncSession, *, answer: TrainingAnswer) -> TrainingAnswer:
        session.add(answer)
        await session.flush()
        return answer

