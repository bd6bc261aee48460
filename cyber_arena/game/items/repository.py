from __future__ import annotations

from typing import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.repo.training_items_repo import TrainingItemsRepo
from cyber_arena.game.items.catalog import FILTER_ALL
from cyber_arena.game.items.records import to_training_item
from cyber_arena.game.items.sampling import sample_item_ids
from cyber_arena.game.items.types import TrainingItem

logger = structlog.get_logger(__name__)


async def get_items_by_ids(
    session: AsyncSession,
    *,
    item_ids: Sequence[str],
) -> dict[str, TrainingItem]:
    records = await TrainingItemsRepo.list_active_by_ids(session, item_ids=item_ids)
    return {record.item_id: to_training_item(record) for record in records}


async def sample_items(
    session: AsyncSession,
    *,
    kind: str,
    category: str,
    difficulty: str,
    count: int,
    selection_seed: str,
) -> list[TrainingItem]:
    candidate_ids = await TrainingItemsRepo.list_active_item_ids(
        session,
        kind=kind,
        category=None if category == FILTER_ALL else category,
        difficulty=None if difficulty == FILTER_ALL else difficulty,
    )
    selected_ids = sample_item_ids(
        candidate_ids,
        count=count,
        selection_seed=selection_seed,
    )
    if len(selected_ids) < count:
        logger.info(
            "training_item_pool_underfilled",
            kind=kind,
            category=category,
            difficulty=difficulty,
            requested=count,
            available=len(selected_ids),
        )

    items_by_id = await get_items_by_ids(session, item_ids=selected_ids)
    return [items_by_id[item_id] for item_id in selected_ids if item_id in items_by_id]
