from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.db.models.training_sessions import TrainingSession
from cyber_arena.db.repo.training_answers_repo import TrainingAnswersRepo
from cyber_arena.db.repo.training_sessions_repo import TrainingSessionsRepo
from cyber_arena.game.sessions.errors import SessionNotFoundError
from cyber_arena.game.sessions.progress import LoggedAnswer, SessionProgress, build_progress


async def _load_owned_session(
    session: AsyncSession,
    *,
    user_id: str,
    session_id: UUID,
    for_update: bool = False,
) -> TrainingSession:
    if for_update:
        training_session = await TrainingSessionsRepo.get_by_id_for_update(session, session_id)
    else:
        training_session = await TrainingSessionsRepo.get_by_id(session, session_id)
    # Another user's session is indistinguishable from a missing one.
    if training_session is None or training_session.user_id != user_id:
        raise SessionNotFoundError
    return training_session


async def _load_progress(
    session: AsyncSession,
    *,
    training_session: TrainingSession,
) -> SessionProgress:
    rows = await TrainingAnswersRepo.list_for_session(session, session_id=training_session.id)
    return build_progress(
        session_id=training_session.id,
        status=training_session.status,
        item_ids=list(training_session.item_ids or []),
        answers=[
            LoggedAnswer(
                position=row.position,
                item_id=row.item_id,
                answer=row.answer,  # type: ignore[arg-type]
                elapsed_ms=row.elapsed_ms,
            )
            for row in rows
        ],
    )
