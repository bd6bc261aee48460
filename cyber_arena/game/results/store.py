"""Append-only store of completed session results."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.models.training_results import TrainingResult
from cyber_arena.db.repo.training_results_repo import TrainingResultsRepo
from cyber_arena.game.results.errors import ResultAlreadyRecordedError
from cyber_arena.game.results.types import StoredResult
from cyber_arena.game.scoring.types import ScoredSession, outcome_from_record

logger = structlog.get_logger(__name__)


def to_stored_result(row: TrainingResult) -> StoredResult:
    return StoredResult(
        session_id=row.session_id,
        user_id=row.user_id,
        game_type=row.game_type,
        score=row.score,
        correct_count=row.correct_count,
        total_items=row.total_items,
        total_elapsed_seconds=row.total_elapsed_seconds,
        outcomes=tuple(outcome_from_record(raw) for raw in (row.item_outcomes or [])),
        completed_at=row.completed_at,
    )


async def record_result(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: str,
    scored: ScoredSession,
    total_elapsed_seconds: int,
    completed_at: datetime,
) -> StoredResult:
    existing = await TrainingResultsRepo.get_by_session_id(session, session_id=session_id)
    if existing is not None:
        raise ResultAlreadyRecordedError

    try:
        created = await TrainingResultsRepo.create(
            session,
            result_row=TrainingResult(
                session_id=session_id,
                user_id=user_id,
                game_type=scored.game_type,
                score=scored.score,
                correct_count=scored.correct_count,
                total_items=scored.total_items,
                total_elapsed_seconds=max(0, total_elapsed_seconds),
                item_outcomes=[outcome.to_record() for outcome in scored.outcomes],
                completed_at=completed_at,
            ),
        )
    except IntegrityError as exc:
        raise ResultAlreadyRecordedError from exc

    logger.info(
        "training_result_recorded",
        session_id=str(session_id),
        user_id=user_id,
        game_type=scored.game_type,
        score=scored.score,
        correct_count=scored.correct_count,
        total_items=scored.total_items,
    )
    return to_stored_result(created)


async def get_result(session: AsyncSession, *, session_id: UUID) -> StoredResult | None:
    row = await TrainingResultsRepo.get_by_session_id(session, session_id=session_id)
    if row is None:
        return None
    return to_stored_result(row)


async def list_results(session: AsyncSession) -> list[StoredResult]:
    rows = await TrainingResultsRepo.list_completed(session)
    return [to_stored_result(row) for row in rows]
