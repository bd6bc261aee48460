from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from cyber_arena.game.items.views import TrainingItemView
from cyber_arena.game.results.types import StoredResult


@dataclass(slots=True)
class StartTrainingSessionResult:
    session_id: UUID
    game_type: str
    category: str
    difficulty: str
    item_time_budget_ms: int | None
    items: tuple[TrainingItemView, ...]
    started_at: datetime
    timeout_answer: int | bool | None = None

    @property
    def total_items(self) -> int:
        return len(self.items)


@dataclass(slots=True)
class TrainingSessionProgress:
    session_id: UUID
    game_type: str
    status: str
    current_index: int
    total_items: int
    next_item_id: str | None
    answered_item_ids: tuple[str, ...]
    item_time_budget_ms: int | None
    started_at: datetime
    completed_at: datetime | None = None
    result: StoredResult | None = None


@dataclass(slots=True)
class ScenarioFeedback:
    item_id: str
    is_correct: bool
    points_awarded: int
    feedback: str | None
    correct_choice_text: str | None
    explanation: str


@dataclass(slots=True)
class SubmitAnswerResult:
    session_id: UUID
    item_id: str
    position: int
    status: str
    next_item_id: str | None
    feedback: ScenarioFeedback | None = None
    result: StoredResult | None = None

    @property
    def completed(self) -> bool:
        return self.result is not None
