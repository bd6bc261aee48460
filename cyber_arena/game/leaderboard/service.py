from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.repo.training_results_repo import TrainingResultsRepo
from cyber_arena.game.items.catalog import LEADERBOARD_OVERALL
from cyber_arena.game.leaderboard.ranking import clamp_limit, rank_rollups
from cyber_arena.game.leaderboard.types import LeaderboardPage


async def get_leaderboard(
    session: AsyncSession,
    *,
    game_type: str = LEADERBOARD_OVERALL,
    limit: int | None = None,
) -> LeaderboardPage:
    # A game type with no results, known or not, ranks to an empty page.
    effective_limit = clamp_limit(limit)
    rollups = await TrainingResultsRepo.rollup_scores_by_user(
        session,
        game_type=None if game_type == LEADERBOARD_OVERALL else game_type,
    )
    return LeaderboardPage(
        game_type=game_type,
        limit=effective_limit,
        entries=tuple(rank_rollups(rollups, limit=effective_limit)),
    )
