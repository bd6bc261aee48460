"""Pure aggregations over completed results.

Nothing here reads or caches state, so running the same inputs twice yields
identical snapshots.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timedelta, tzinfo

from cyber_arena.game.analytics.types import (
    AnalyticsOverview,
    AnalyticsSnapshot,
    DailyActivity,
    GameTypeScore,
    ItemMetadata,
    MissedItem,
    RecentSession,
)
from cyber_arena.game.items.catalog import GAME_TYPE_QUIZ, GAME_TYPES
from cyber_arena.game.results.types import StoredResult

MOST_MISSED_LIMIT = 10
RECENT_SESSIONS_LIMIT = 10
DAILY_ACTIVITY_WINDOW_DAYS = 30


def build_overview(
    results: Sequence[StoredResult],
    *,
    items_by_kind: Mapping[str, int],
) -> AnalyticsOverview:
    return AnalyticsOverview(
        active_users=len({result.user_id for result in results}),
        total_items=sum(items_by_kind.values()),
        items_by_kind={kind: int(items_by_kind.get(kind, 0)) for kind in GAME_TYPES},
        total_sessions=len(results),
    )


def scores_by_game_type(results: Sequence[StoredResult]) -> list[GameTypeScore]:
    totals: dict[str, list[int]] = defaultdict(list)
    for result in results:
        totals[result.game_type].append(result.score)
    return [
        GameTypeScore(
            game_type=game_type,
            average_score=round(sum(scores) / len(scores), 2),
            total_sessions=len(scores),
        )
        for game_type, scores in sorted(totals.items())
    ]


def most_missed_items(
    results: Sequence[StoredResult],
    *,
    items_by_id: Mapping[str, ItemMetadata],
    limit: int = MOST_MISSED_LIMIT,
) -> list[MissedItem]:
    """Ranks quiz items by how often they were answered incorrectly.

    Ranking happens before the metadata join, so an item that no longer
    resolves still takes its slot and is then dropped.
    """
    misses: Counter[str] = Counter()
    for result in results:
        if result.game_type != GAME_TYPE_QUIZ:
            continue
        for outcome in result.outcomes:
            if not outcome.is_correct:
                misses[outcome.item_id] += 1

    ranked = sorted(misses.items(), key=lambda entry: (-entry[1], entry[0]))[:limit]
    missed: list[MissedItem] = []
    for item_id, count in ranked:
        metadata = items_by_id.get(item_id)
        if metadata is None:
            continue
        missed.append(
            MissedItem(
                item_id=item_id,
                missed_count=count,
                prompt=metadata.prompt,
                category=metadata.category,
                difficulty=metadata.difficulty,
            )
        )
    return missed


def daily_activity(
    results: Sequence[StoredResult],
    *,
    now_utc: datetime,
    local_tz: tzinfo,
    window_days: int = DAILY_ACTIVITY_WINDOW_DAYS,
) -> list[DailyActivity]:
    since_utc = now_utc - timedelta(days=window_days)
    sessions: Counter[date] = Counter()
    users: dict[date, set[str]] = defaultdict(set)
    for result in results:
        if result.completed_at < since_utc:
            continue
        local_day = result.completed_at.astimezone(local_tz).date()
        sessions[local_day] += 1
        users[local_day].add(result.user_id)
    return [
        DailyActivity(day=day, sessions=sessions[day], unique_users=len(users[day]))
        for day in sorted(sessions)
    ]


def recent_sessions(
    results: Sequence[StoredResult],
    *,
    limit: int = RECENT_SESSIONS_LIMIT,
) -> list[RecentSession]:
    ordered = sorted(
        results,
        key=lambda result: (result.completed_at, str(result.session_id)),
        reverse=True,
    )
    return [
        RecentSession(
            session_id=result.session_id,
            user_id=result.user_id,
            game_type=result.game_type,
            score=result.score,
            completed_at=result.completed_at,
        )
        for result in ordered[:limit]
    ]


def build_snapshot(
    results: Sequence[StoredResult],
    *,
    items_by_kind: Mapping[str, int],
    items_by_id: Mapping[str, ItemMetadata],
    now_utc: datetime,
    local_tz: tzinfo,
) -> AnalyticsSnapshot:
    return AnalyticsSnapshot(
        generated_at=now_utc,
        overview=build_overview(results, items_by_kind=items_by_kind),
        scores_by_game_type=tuple(scores_by_game_type(results)),
        most_missed=tuple(most_missed_items(results, items_by_id=items_by_id)),
        daily_activity=tuple(daily_activity(results, now_utc=now_utc, local_tz=local_tz)),
        recent_sessions=tuple(recent_sessions(results)),
    )


def missed_item_ids(results: Sequence[StoredResult]) -> list[str]:
    seen: dict[str, None] = {}
    for result in results:
        if result.game_type != GAME_TYPE_QUIZ:
            continue
        for outcome in result.outcomes:
            if not outcome.is_correct:
                seen.setdefault(outcome.item_id, None)
    return list(seen)
