from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.core.config import get_settings
from cyber_arena.db.repo.training_items_repo import TrainingItemsRepo
from cyber_arena.game.analytics.aggregator import build_snapshot, missed_item_ids
from cyber_arena.game.analytics.types import AnalyticsSnapshot, ItemMetadata
from cyber_arena.game.results.store import list_results

logger = structlog.get_logger(__name__)


async def build_analytics_snapshot(
    session: AsyncSession,
    *,
    now_utc: datetime,
) -> AnalyticsSnapshot:
    settings = get_settings()
    results = await list_results(session)
    items_by_kind = await TrainingItemsRepo.count_active_by_kind(session)

    # Disabled items still carry prompts worth reporting on.
    records = await TrainingItemsRepo.list_by_ids(session, item_ids=missed_item_ids(results))
    items_by_id = {
        record.item_id: ItemMetadata(
            item_id=record.item_id,
            kind=record.kind,
            prompt=record.prompt,
            category=record.category,
            difficulty=record.difficulty,
        )
        for record in records
    }

    snapshot = build_snapshot(
        results,
        items_by_kind=items_by_kind,
        items_by_id=items_by_id,
        now_utc=now_utc,
        local_tz=ZoneInfo(settings.analytics_timezone),
    )
    logger.info(
        "training_analytics_snapshot_built",
        total_sessions=snapshot.overview.total_sessions,
        active_users=snapshot.overview.active_users,
        most_missed=len(snapshot.most_missed),
    )
    return snapshot
