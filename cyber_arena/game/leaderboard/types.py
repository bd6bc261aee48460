from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    rank: int
    user_id: str
    total_score: int
    games_played: int
    average_score: int
    best_score: int
    last_played: datetime


@dataclass(frozen=True, slots=True)
class LeaderboardPage:
    game_type: str
    limit: int
    entries: tuple[LeaderboardEntry, ...]


@dataclass(frozen=True, slots=True)
class LeaderboardChangedEvent:
    topic: str
    game_type: str
    user_id: str
    session_id: UUID
    score: int
    occurred_at: datetime

    def to_payload(self) -> dict[str, object]:
        return {
            "event_type": "leaderboard_changed",
            "topic": self.topic,
            "game_type": self.game_type,
            "user_id": self.user_id,
            "session_id": str(self.session_id),
            "score": self.score,
            "occurred_at": self.occurred_at.isoformat(),
        }
