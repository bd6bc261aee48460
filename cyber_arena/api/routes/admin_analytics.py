from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request

from cyber_arena.db.session import SessionLocal
from cyber_arena.game.analytics.service import build_analytics_snapshot
from cyber_arena.game.analytics.types import AnalyticsSnapshot

from .caller_access import _require_caller
from .training_models import (
    AnalyticsOverviewResponse,
    AnalyticsSnapshotResponse,
    DailyActivityResponse,
    GameTypeScoreResponse,
    MissedItemResponse,
    RecentSessionResponse,
)

router = APIRouter(tags=["admin", "analytics"])
logger = structlog.get_logger(__name__)


def _as_snapshot_response(snapshot: AnalyticsSnapshot) -> AnalyticsSnapshotResponse:
    overview = snapshot.overview
    return AnalyticsSnapshotResponse(
        generated_at=snapshot.generated_at,
        overview=AnalyticsOverviewResponse(
            active_users=overview.active_users,
            total_items=overview.total_items,
            items_by_kind=dict(overview.items_by_kind),
            total_sessions=overview.total_sessions,
        ),
        scores_by_game_type=[
            GameTypeScoreResponse(
                game_type=row.game_type,
                average_score=row.average_score,
                total_sessions=row.total_sessions,
            )
            for row in snapshot.scores_by_game_type
        ],
        most_missed=[
            MissedItemResponse(
                item_id=row.item_id,
                missed_count=row.missed_count,
                prompt=row.prompt,
                category=row.category,
                difficulty=row.difficulty,
            )
            for row in snapshot.most_missed
        ],
        daily_activity=[
            DailyActivityResponse(day=row.day, sessions=row.sessions, unique_users=row.unique_users)
            for row in snapshot.daily_activity
        ],
        recent_sessions=[
            RecentSessionResponse(
                session_id=row.session_id,
                user_id=row.user_id,
                game_type=row.game_type,
                score=row.score,
                completed_at=row.completed_at,
            )
            for row in snapshot.recent_sessions
        ],
    )


@router.get("/admin/analytics", response_model=AnalyticsSnapshotResponse)
async def get_admin_analytics(request: Request) -> AnalyticsSnapshotResponse:
    caller = _require_caller(request, admin=True)
    now_utc = datetime.now(timezone.utc)

    async with SessionLocal.begin() as session:
        snapshot = await build_analytics_snapshot(session, now_utc=now_utc)

    logger.info("admin_analytics_served", user_id=caller.user_id)
    return _as_snapshot_response(snapshot)
