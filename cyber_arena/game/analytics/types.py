from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ItemMetadata:
    item_id: str
    kind: str
    prompt: str
    category: str
    difficulty: str


@dataclass(frozen=True, slots=True)
class AnalyticsOverview:
    active_users: int
    total_items: int
    items_by_kind: dict[str, int]
    total_sessions: int


@dataclass(frozen=True, slots=True)
class GameTypeScore:
    game_type: str
    average_score: float
    total_sessions: int


@dataclass(frozen=True, slots=True)
class MissedItem:
    item_id: str
    missed_count: int
    prompt: str
    category: str
    difficulty: str


@dataclass(frozen=True, slots=True)
class DailyActivity:
    day: date
    sessions: int
    unique_users: int


@dataclass(frozen=True, slots=True)
class RecentSession:
    session_id: UUID
    user_id: str
    game_type: str
    score: int
    completed_at: datetime


@dataclass(frozen=True, slots=True)
class AnalyticsSnapshot:
    generated_at: datetime
    overview: AnalyticsOverview
    scores_by_game_type: tuple[GameTypeScore, ...] = field(default_factory=tuple)
    most_missed: tuple[MissedItem, ...] = field(default_factory=tuple)
    daily_activity: tuple[DailyActivity, ...] = field(default_factory=tuple)
    recent_sessions: tuple[RecentSession, ...] = field(default_factory=tuple)
