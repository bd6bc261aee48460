from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.game.results.store import get_result
from cyber_arena.game.sessions.progress import SESSION_STATUS_COMPLETED
from cyber_arena.game.sessions.types import TrainingSessionProgress

from .session_loading import _load_owned_session, _load_progress


async def get_session_progress(
    session: AsyncSession,
    *,
    user_id: str,
    session_id: UUID,
) -> TrainingSessionProgress:
    training_session = await _load_owned_session(session, user_id=user_id, session_id=session_id)
    progress = await _load_progress(session, training_session=training_session)

    result = None
    if progress.status == SESSION_STATUS_COMPLETED:
        result = await get_result(session, session_id=training_session.id)

    return TrainingSessionProgress(
        session_id=training_session.id,
        game_type=training_session.game_type,
        status=progress.status,
        current_index=progress.current_index,
        total_items=progress.total_items,
        next_item_id=progress.next_item_id,
        answered_item_ids=tuple(answer.item_id for answer in progress.answers),
        item_time_budget_ms=training_session.item_time_budget_ms,
        started_at=training_session.started_at,
        completed_at=training_session.completed_at,
        result=result,
    )

