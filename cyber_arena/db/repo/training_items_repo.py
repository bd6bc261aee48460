from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.models.training_items import TrainingItem


class TrainingItemsRepo:
    @staticmethod
    async def list_active_item_ids(
        session: AsyncSession,
        *,
        kind: str,
        category: str | None = None,
        difficulty: str | None = None,
    ) -> list[str]:
        stmt = (
            select(TrainingItem.item_id)
            .where(
                TrainingItem.kind == kind,
                TrainingItem.status == "ACTIVE",
            )
            .order_by(TrainingItem.item_id.asc())
        )
        if category is not None:
            stmt = stmt.where(TrainingItem.category == category)
        if difficulty is not None:
            stmt = stmt.where(TrainingItem.difficulty == difficulty)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_active_by_ids(
        session: AsyncSession,
        *,
        item_ids: Sequence[str],
    ) -> list[TrainingItem]:
        if not item_ids:
            return []
        stmt = select(TrainingItem).where(
            TrainingItem.item_id.in_(tuple(item_ids)),
            TrainingItem.status == "ACTIVE",
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_by_ids(
        session: AsyncSession,
        *,
        item_ids: Sequence[str],
    ) -> list[TrainingItem]:
        if not item_ids:
            return []
        stmt = select(TrainingItem).where(TrainingItem.item_id.in_(tuple(item_ids)))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def count_active_by_kind(session: AsyncSession) -> dict[str, int]:
        stmt = (
            select(TrainingItem.kind, func.count(TrainingItem.item_id))
            .where(TrainingItem.status == "ACTIVE")
            .group_by(TrainingItem.kind)
        )
        result = await session.execute(stmt)
        return {str(kind): int(total) for kind, total in result.all()}
