from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.core.config import get_settings
from cyber_arena.db.models.training_answers import TrainingAnswer
from cyber_arena.db.models.training_sessions import TrainingSession
from cyber_arena.db.repo.training_answers_repo import TrainingAnswersRepo
from cyber_arena.game.items.repository import get_items_by_ids
from cyber_arena.game.items.types import ScenarioItem, TrainingItem
from cyber_arena.game.scoring.rules import score_scenario_answer
from cyber_arena.game.scoring.types import SubmittedAnswer
from cyber_arena.game.scoring.validation import normalize_answer, normalize_unresolved_answer
from cyber_arena.game.sessions.errors import (
    DuplicateAnswerError,
    IncompleteSubmissionError,
    InvalidAnswerPayloadError,
)
from cyber_arena.game.sessions.progress import (
    LoggedAnswer,
    SessionProgress,
    append_answer,
    check_elapsed_within_budget,
    check_next_answer,
    ensure_in_progress,
)
from cyber_arena.game.sessions.types import ScenarioFeedback, SubmitAnswerResult

from .session_loading import _load_owned_session, _load_progress
from .sessions_complete import complete_session

logger = structlog.get_logger(__name__)


def _validated_answer(
    *,
    training_session: TrainingSession,
    progress: SessionProgress,
    item: TrainingItem | None,
    submitted: SubmittedAnswer,
) -> LoggedAnswer:
    position = check_next_answer(progress, item_id=submitted.item_id)
    if isinstance(submitted.elapsed_ms, bool) or submitted.elapsed_ms < 0:
        raise InvalidAnswerPayloadError

    if item is None:
        answer = normalize_unresolved_answer(training_session.game_type, submitted.answer)
    else:
        answer = normalize_answer(item, submitted.answer)

    settings = get_settings()
    if settings.training_enforce_item_time_budget:
        check_elapsed_within_budget(
            elapsed_ms=submitted.elapsed_ms,
            budget_ms=training_session.item_time_budget_ms,
            tolerance_ms=settings.training_item_time_tolerance_ms,
        )

    return LoggedAnswer(
        position=position,
        item_id=submitted.item_id,
        answer=answer,
        elapsed_ms=submitted.elapsed_ms,
    )


async def _write_answers(
    session: AsyncSession,
    *,
    training_session: TrainingSession,
    answers: Sequence[LoggedAnswer],
    now_utc: datetime,
) -> None:
    try:
        for answer in answers:
            await TrainingAnswersRepo.create(
                session,
                answer=TrainingAnswer(
                    session_id=training_session.id,
                    position=answer.position,
                    item_id=answer.item_id,
                    answer=answer.answer,
                    elapsed_ms=answer.elapsed_ms,
                    answered_at=now_utc,
                ),
            )
    except IntegrityError as exc:
        raise DuplicateAnswerError from exc


def _scenario_feedback(item: ScenarioItem, answer: LoggedAnswer) -> ScenarioFeedback:
    outcome = score_scenario_answer(
        item,
        SubmittedAnswer(item_id=answer.item_id, answer=answer.answer, elapsed_ms=answer.elapsed_ms),
    )
    return ScenarioFeedback(
        item_id=outcome.item_id,
        is_correct=outcome.is_correct,
        points_awarded=outcome.points_awarded,
        feedback=outcome.feedback,
        correct_choice_text=outcome.correct_answer_text,
        explanation=outcome.explanation,
    )


async def submit_answer(
    session: AsyncSession,
    *,
    user_id: str,
    session_id: UUID,
    item_id: str,
    answer: object,
    elapsed_ms: int,
    now_utc: datetime,
) -> SubmitAnswerResult:
    training_session = await _load_owned_session(
        session,
        user_id=user_id,
        session_id=session_id,
        for_update=True,
    )
    progress = await _load_progress(session, training_session=training_session)
    ensure_in_progress(progress)
    check_next_answer(progress, item_id=item_id)

    items_by_id = await get_items_by_ids(session, item_ids=[item_id])
    item = items_by_id.get(item_id)
    logged = _validated_answer(
        training_session=training_session,
        progress=progress,
        item=item,
        submitted=SubmittedAnswer(
            item_id=item_id,
            answer=answer,  # type: ignore[arg-type]
            elapsed_ms=elapsed_ms,
        ),
    )
    await _write_answers(
        session,
        training_session=training_session,
        answers=[logged],
        now_utc=now_utc,
    )
    progress = append_answer(progress, logged)
    logger.info(
        "training_answer_recorded",
        session_id=str(session_id),
        item_id=item_id,
        position=logged.position,
        elapsed_ms=logged.elapsed_ms,
    )

    feedback = None
    if isinstance(item, ScenarioItem):
        feedback = _scenario_feedback(item, logged)

    stored = None
    if progress.all_answered:
        stored = await complete_session(
            session,
            training_session=training_session,
            progress=progress,
            now_utc=now_utc,
        )

    return SubmitAnswerResult(
        session_id=session_id,
        item_id=item_id,
        position=logged.position,
        status=training_session.status,
        next_item_id=None if stored is not None else progress.next_item_id,
        feedback=feedback,
        result=stored,
    )


async def submit_session(
    session: AsyncSession,
    *,
    user_id: str,
    session_id: UUID,
    answers: Sequence[SubmittedAnswer],
    now_utc: datetime,
    total_elapsed_seconds: int | None = None,
) -> SubmitAnswerResult:
    """Submits every remaining answer in sampled order and completes the session.

    The whole batch is validated before anything is written, so a rejected
    submission leaves the session exactly where it was.
    """
    training_session = await _load_owned_session(
        session,
        user_id=user_id,
        session_id=session_id,
        for_update=True,
    )
    progress = await _load_progress(session, training_session=training_session)
    ensure_in_progress(progress)
    if total_elapsed_seconds is not None and total_elapsed_seconds < 0:
        raise InvalidAnswerPayloadError

    remaining = progress.remaining_item_ids
    if len(answers) != len(remaining):
        raise IncompleteSubmissionError

    items_by_id = await get_items_by_ids(session, item_ids=remaining)
    pending: list[LoggedAnswer] = []
    staged = progress
    for submitted in answers:
        logged = _validated_answer(
            training_session=training_session,
            progress=staged,
            item=items_by_id.get(submitted.item_id),
            submitted=submitted,
        )
        staged = append_answer(staged, logged)
        pending.append(logged)

    await _write_answers(
        session,
        training_session=training_session,
        answers=pending,
        now_utc=now_utc,
    )
    stored = await complete_session(
        session,
        training_session=training_session,
        progress=staged,
        now_utc=now_utc,
        total_elapsed_seconds=total_elapsed_seconds,
    )
    last_item_id = pending[-1].item_id if pending else ""
    return SubmitAnswerResult(
        session_id=session_id,
        item_id=last_item_id,
        position=max(0, staged.current_index - 1),
        status=training_session.status,
        next_item_id=None,
        result=stored,
    )
