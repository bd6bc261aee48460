from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from cyber_arena.core.config import get_settings
from cyber_arena.db.models.training_sessions import TrainingSession
from cyber_arena.db.repo.training_sessions_repo import TrainingSessionsRepo
from cyber_arena.game.items.catalog import (
    DEFAULT_SESSION_SIZE,
    ITEM_TIME_BUDGET_MS,
    default_answer_for,
    is_game_type,
    normalize_filter,
)
from cyber_arena.game.items.repository import sample_items
from cyber_arena.game.items.views import to_client_view
from cyber_arena.game.sessions.errors import InvalidGameTypeError, InvalidSessionSizeError
from cyber_arena.game.sessions.progress import SESSION_STATUS_IN_PROGRESS
from cyber_arena.game.sessions.types import StartTrainingSessionResult

logger = structlog.get_logger(__name__)


def _resolve_session_size(*, game_type: str, count: int | None, max_items: int) -> int:
    if count is None:
        return min(DEFAULT_SESSION_SIZE[game_type], max_items)
    if count < 1 or count > max_items:
        raise InvalidSessionSizeError
    return count


async def start_session(
    session: AsyncSession,
    *,
    user_id: str,
    game_type: str,
    now_utc: datetime,
    category: str | None = None,
    difficulty: str | None = None,
    count: int | None = None,
    session_id: UUID | None = None,
) -> StartTrainingSessionResult:
    if not is_game_type(game_type):
        raise InvalidGameTypeError

    settings = get_settings()
    size = _resolve_session_size(
        game_type=game_type,
        count=count,
        max_items=settings.training_max_items_per_session,
    )
    category_filter = normalize_filter(category)
    difficulty_filter = normalize_filter(difficulty)
    new_session_id = session_id or uuid4()

    items = await sample_items(
        session,
        kind=game_type,
        category=category_filter,
        difficulty=difficulty_filter,
        count=size,
        selection_seed=str(new_session_id),
    )
    item_time_budget_ms = ITEM_TIME_BUDGET_MS[game_type]

    created = await TrainingSessionsRepo.create(
        session,
        training_session=TrainingSession(
            id=new_session_id,
            user_id=user_id,
            game_type=game_type,
            category_filter=category_filter,
            difficulty_filter=difficulty_filter,
            status=SESSION_STATUS_IN_PROGRESS,
            item_ids=[item.item_id for item in items],
            item_time_budget_ms=item_time_budget_ms,
            started_at=now_utc,
            completed_at=None,
        ),
    )
    logger.info(
        "training_session_started",
        session_id=str(created.id),
        user_id=user_id,
        game_type=game_type,
        category=category_filter,
        difficulty=difficulty_filter,
        requested_items=size,
        sampled_items=len(items),
    )

    return StartTrainingSessionResult(
        session_id=created.id,
        game_type=game_type,
        category=category_filter,
        difficulty=difficulty_filter,
        item_time_budget_ms=item_time_budget_ms,
        items=tuple(to_client_view(item) for item in items),
        started_at=now_utc,
        timeout_answer=default_answer_for(game_type),
    )
