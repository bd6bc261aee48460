"""Session progress as a value.

A running session is fully described by its sampled item order plus the
answer log, both of which live in the database. Everything here derives state
from those two pieces so any worker can pick up the next submission.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID

from cyber_arena.game.sessions.errors import (
    DuplicateAnswerError,
    ItemNotInSessionError,
    ItemOutOfOrderError,
    ItemTimeBudgetExceededError,
    SessionAlreadyCompletedError,
)

SESSION_STATUS_IDLE = "IDLE"
SESSION_STATUS_IN_PROGRESS = "IN_PROGRESS"
SESSION_STATUS_COMPLETED = "COMPLETED"


@dataclass(frozen=True, slots=True)
class LoggedAnswer:
    position: int
    item_id: str
    answer: int | bool
    elapsed_ms: int


@dataclass(frozen=True, slots=True)
class SessionProgress:
    session_id: UUID
    status: str
    item_ids: tuple[str, ...]
    answers: tuple[LoggedAnswer, ...] = ()

    @property
    def current_index(self) -> int:
        return len(self.answers)

    @property
    def total_items(self) -> int:
        return len(self.item_ids)

    @property
    def next_item_id(self) -> str | None:
        if self.status == SESSION_STATUS_COMPLETED or self.current_index >= self.total_items:
            return None
        return self.item_ids[self.current_index]

    @property
    def remaining_item_ids(self) -> tuple[str, ...]:
        if self.status == SESSION_STATUS_COMPLETED:
            return ()
        return self.item_ids[self.current_index :]

    @property
    def all_answered(self) -> bool:
        return self.current_index >= self.total_items


def build_progress(
    *,
    session_id: UUID,
    status: str,
    item_ids: list[str] | tuple[str, ...],
    answers: list[LoggedAnswer] | tuple[LoggedAnswer, ...] = (),
) -> SessionProgress:
    return SessionProgress(
        session_id=session_id,
        status=status,
        item_ids=tuple(item_ids),
        answers=tuple(sorted(answers, key=lambda answer: answer.position)),
    )


def ensure_in_progress(progress: SessionProgress) -> None:
    if progress.status == SESSION_STATUS_COMPLETED:
        raise SessionAlreadyCompletedError


def check_next_answer(progress: SessionProgress, *, item_id: str) -> int:
    """Returns the log position for ``item_id`` or raises without touching state."""
    ensure_in_progress(progress)
    if item_id not in progress.item_ids:
        raise ItemNotInSessionError
    if any(answer.item_id == item_id for answer in progress.answers):
        raise DuplicateAnswerError
    if item_id != progress.next_item_id:
        raise ItemOutOfOrderError
    return progress.current_index


def append_answer(progress: SessionProgress, answer: LoggedAnswer) -> SessionProgress:
    position = check_next_answer(progress, item_id=answer.item_id)
    if answer.position != position:
        raise ItemOutOfOrderError
    return replace(progress, answers=progress.answers + (answer,))


def mark_completed(progress: SessionProgress) -> SessionProgress:
    ensure_in_progress(progress)
    return replace(progress, status=SESSION_STATUS_COMPLETED)


def check_elapsed_within_budget(
    *,
    elapsed_ms: int,
    budget_ms: int | None,
    tolerance_ms: int,
) -> None:
    if budget_ms is None:
        return
    if elapsed_ms > budget_ms + max(0, tolerance_ms):
        raise ItemTimeBudgetExceededError
