from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.models.training_sessions import TrainingSession


class TrainingSessionsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, session_id: UUID) -> TrainingSession | None:
        return await session.get(TrainingSession, session_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, session_id: UUID) -> TrainingSession | None:
        stmt = select(TrainingSession).where(TrainingSession.id == session_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, training_session: TrainingSession) -> TrainingSession:
        session.add(training_session)
        await session.flush()
        return training_session

    @staticmethod
    async def mark_completed(
        session: AsyncSession,
        *,
        training_session: TrainingSession,
        completed_at: datetime,
    ) -> TrainingSession:
        training_session.status = "COMPLETED"
        training_session.completed_at = completed_at
        await session.flush()
        return training_session
