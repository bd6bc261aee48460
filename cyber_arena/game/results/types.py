from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from cyber_arena.game.scoring.types import ItemOutcome


@dataclass(frozen=True, slots=True)
class StoredResult:
    session_id: UUID
    user_id: str
    game_type: str
    score: int
    correct_count: int
    total_items: int
    total_elapsed_seconds: int
    outcomes: tuple[ItemOutcome, ...]
    completed_at: datetime
