from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from cyber_arena.db.models.training_items import TrainingItem
from cyber_arena.db.models.training_results import TrainingResult
from cyber_arena.db.models.training_sessions import TrainingSession
from cyber_arena.db.session import SessionLocal

UTC = timezone.utc


def _quiz_row(item_id: str, *, correct_option: int, now_utc: datetime) -> TrainingItem:
    return TrainingItem(
        item_id=item_id,
        kind="quiz",
        category="general",
        difficulty="easy",
        title=item_id,
        prompt=f"Question {item_id}?",
        payload={"options": ["A", "B", "C", "D"], "correct_option": correct_option},
        explanation=f"Explanation {item_id}.",
        status="ACTIVE",
        created_at=now_utc,
        updated_at=now_utc,
    )


async def _seed_quiz_items(correct_options: dict[str, int], *, now_utc: datetime) -> None:
    async with SessionLocal.begin() as session:
        for item_id, correct_option in correct_options.items():
            session.add(_quiz_row(item_id, correct_option=correct_option, now_utc=now_utc))


async def _seed_result(
    *,
    user_id: str,
    game_type: str,
    score: int,
    completed_at: datetime,
) -> None:
    session_id = uuid4()
    async with SessionLocal.begin() as session:
        session.add(
            TrainingSession(
                id=session_id,
                user_id=user_id,
                game_type=game_type,
                category_filter="all",
                difficulty_filter="all",
                status="COMPLETED",
                item_ids=[],
                item_time_budget_ms=None,
                started_at=completed_at,
                completed_at=completed_at,
            )
        )
        await session.flush()
        session.add(
            TrainingResult(
                session_id=session_id,
                user_id=user_id,
                game_type=game_type,
                score=score,
                correct_count=0,
                total_items=0,
                total_elapsed_seconds=0,
                item_outcomes=[],
                completed_at=completed_at,
            )
        )
