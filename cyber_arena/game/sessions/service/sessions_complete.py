from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.models.training_sessions import TrainingSession
from cyber_arena.db.repo.training_sessions_repo import TrainingSessionsRepo
from cyber_arena.game.items.repository import get_items_by_ids
from cyber_arena.game.results.errors import ResultAlreadyRecordedError
from cyber_arena.game.results.store import record_result
from cyber_arena.game.results.types import StoredResult
from cyber_arena.game.scoring.engine import score_session
from cyber_arena.game.scoring.types import SubmittedAnswer
from cyber_arena.game.sessions.errors import SessionAlreadyCompletedError
from cyber_arena.game.sessions.progress import SessionProgress, mark_completed

logger = structlog.get_logger(__name__)


def elapsed_ms_to_seconds(total_ms: int) -> int:
    return (max(0, total_ms) + 500) // 1000


async def complete_session(
    session: AsyncSession,
    *,
    training_session: TrainingSession,
    progress: SessionProgress,
    now_utc: datetime,
    total_elapsed_seconds: int | None = None,
) -> StoredResult:
    completed_progress = mark_completed(progress)

    items_by_id = await get_items_by_ids(session, item_ids=completed_progress.item_ids)
    scored = score_session(
        game_type=training_session.game_type,
        answers=[
            SubmittedAnswer(
                item_id=answer.item_id,
                answer=answer.answer,
                elapsed_ms=answer.elapsed_ms,
            )
            for answer in completed_progress.answers
        ],
        items_by_id=items_by_id,
    )
    skipped = len(completed_progress.answers) - scored.total_items
    if skipped > 0:
        logger.warning(
            "training_session_items_unresolved",
            session_id=str(training_session.id),
            skipped_items=skipped,
        )

    if total_elapsed_seconds is None:
        total_elapsed_seconds = elapsed_ms_to_seconds(
            sum(answer.elapsed_ms for answer in completed_progress.answers)
        )

    try:
        stored = await record_result(
            session,
            session_id=training_session.id,
            user_id=training_session.user_id,
            scored=scored,
            total_elapsed_seconds=total_elapsed_seconds,
            completed_at=now_utc,
        )
    except ResultAlreadyRecordedError as exc:
        raise SessionAlreadyCompletedError from exc

    await TrainingSessionsRepo.mark_completed(
        session,
        training_session=training_session,
        completed_at=now_utc,
    )
    logger.info(
        "training_session_completed",
        session_id=str(training_session.id),
        user_id=training_session.user_id,
        game_type=training_session.game_type,
        score=stored.score,
        correct_count=stored.correct_count,
        total_items=stored.total_items,
    )
    return stored
