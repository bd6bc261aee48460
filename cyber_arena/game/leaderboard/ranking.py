from __future__ import annotations

from collections.abc import Iterable

from cyber_arena.db.repo.training_results_repo import UserScoreRollup
from cyber_arena.game.leaderboard.types import LeaderboardEntry

LEADERBOARD_DEFAULT_LIMIT = 20
LEADERBOARD_MAX_LIMIT = 100


def _average_half_up(total: int, games: int) -> int:
    if games <= 0:
        return 0
    return (2 * total + games) // (2 * games)


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return LEADERBOARD_DEFAULT_LIMIT
    return max(1, min(LEADERBOARD_MAX_LIMIT, limit))


def rank_rollups(
    rollups: Iterable[UserScoreRollup],
    *,
    limit: int | None = None,
) -> list[LeaderboardEntry]:
    """Ranks per-user score rollups.

    Order is total score desc, then most recent play desc, then user id asc, so
    two calls over the same rollups always agree.
    """
    ordered = sorted(
        (rollup for rollup in rollups if rollup.games_played > 0),
        key=lambda rollup: (
            -rollup.total_score,
            -rollup.last_played.timestamp(),
            rollup.user_id,
        ),
    )
    return [
        LeaderboardEntry(
            rank=index,
            user_id=rollup.user_id,
            total_score=rollup.total_score,
            games_played=rollup.games_played,
            average_score=_average_half_up(rollup.total_score, rollup.games_played),
            best_score=rollup.best_score,
            last_played=rollup.last_played,
        )
        for index, rollup in enumerate(ordered[: clamp_limit(limit)], start=1)
    ]
