from __future__ import annotations

from fastapi import APIRouter, Query, Request

from cyber_arena.db.session import SessionLocal
from cyber_arena.game.items.catalog import LEADERBOARD_OVERALL
from cyber_arena.game.leaderboard.service import get_leaderboard

from .caller_access import _require_caller
from .training_models import LeaderboardEntryResponse, LeaderboardResponse

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_training_leaderboard(
    request: Request,
    game_type: str = Query(default=LEADERBOARD_OVERALL, min_length=1, max_length=16),
    limit: int = Query(default=20, ge=1, le=100),
) -> LeaderboardResponse:
    _require_caller(request)
    async with SessionLocal.begin() as session:
        page = await get_leaderboard(session, game_type=game_type, limit=limit)

    return LeaderboardResponse(
        game_type=page.game_type,
        limit=page.limit,
        entries=[
            LeaderboardEntryResponse(
                rank=entry.rank,
                user_id=entry.user_id,
                total_score=entry.total_score,
                games_played=entry.games_played,
                average_score=entry.average_score,
                best_score=entry.best_score,
                last_played=entry.last_played,
            )
            for entry in page.entries
        ],
    )
