from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from cyber_arena.db.models.training_answers import TrainingAnswer
from cyber_arena.db.models.training_results import TrainingResult
from cyber_arena.db.repo.training_results_repo import TrainingResultsRepo, UserScoreRollup
from cyber_arena.db.session import SessionLocal
from cyber_arena.game.analytics.service import build_analytics_snapshot
from cyber_arena.game.leaderboard.service import get_leaderboard
from cyber_arena.game.scoring.types import SubmittedAnswer
from cyber_arena.game.sessions.errors import SessionAlreadyCompletedError
from cyber_arena.game.sessions.service import TrainingSessionService
from tests.integration.training_flow_fixtures import _seed_quiz_items, _seed_result

UTC = timezone.utc
CORRECT = {"quiz-int-001": 1, "quiz-int-002": 0, "quiz-int-003": 2}
SUBMITTED = {"quiz-int-001": 1, "quiz-int-002": 1, "quiz-int-003": 2}


async def _start_quiz(user_id: str, now_utc: datetime):  # noqa: ANN202
    async with SessionLocal.begin() as session:
        return await TrainingSessionService.start_session(
            session,
            user_id=user_id,
            game_type="quiz",
            count=3,
            now_utc=now_utc,
        )


@pytest.mark.asyncio
async def test_quiz_session_flow_scores_ranks_and_aggregates() -> None:
    now_utc = datetime.now(UTC)
    await _seed_quiz_items(CORRECT, now_utc=now_utc)

    started = await _start_quiz("learner-1", now_utc)
    assert sorted(item.item_id for item in started.items) == sorted(CORRECT)

    last = None
    for offset, item in enumerate(started.items):
        async with SessionLocal.begin() as session:
            last = await TrainingSessionService.submit_answer(
                session,
                user_id="learner-1",
                session_id=started.session_id,
                item_id=item.item_id,
                answer=SUBMITTED[item.item_id],
                elapsed_ms=2_000,
                now_utc=now_utc + timedelta(seconds=offset + 1),
            )

    assert last is not None and last.result is not None
    assert last.result.score == 67
    assert last.result.correct_count == 2
    assert {outcome.item_id: outcome.is_correct for outcome in last.result.outcomes} == {
        "quiz-int-001": True,
        "quiz-int-002": False,
        "quiz-int-003": True,
    }

    async with SessionLocal.begin() as session:
        page = await get_leaderboard(session, game_type="quiz")
        snapshot = await build_analytics_snapshot(session, now_utc=now_utc + timedelta(minutes=1))

    assert [(entry.user_id, entry.total_score) for entry in page.entries] == [("learner-1", 67)]
    assert [(row.item_id, row.missed_count) for row in snapshot.most_missed] == [("quiz-int-002", 1)]
    assert snapshot.overview.total_sessions == 1
    assert snapshot.overview.items_by_kind["quiz"] == 3


@pytest.mark.asyncio
async def test_resubmitting_completed_session_keeps_single_result() -> None:
    now_utc = datetime.now(UTC)
    await _seed_quiz_items(CORRECT, now_utc=now_utc)
    started = await _start_quiz("learner-2", now_utc)
    answers = [
        SubmittedAnswer(item_id=item.item_id, answer=SUBMITTED[item.item_id])
        for item in started.items
    ]

    async with SessionLocal.begin() as session:
        await TrainingSessionService.submit_session(
            session,
            user_id="learner-2",
            session_id=started.session_id,
            answers=answers,
            now_utc=now_utc,
        )

    with pytest.raises(SessionAlreadyCompletedError):
        async with SessionLocal.begin() as session:
            await TrainingSessionService.submit_session(
                session,
                user_id="learner-2",
                session_id=started.session_id,
                answers=answers,
                now_utc=now_utc,
            )

    async with SessionLocal() as session:
        results_count = await session.scalar(
            select(func.count(TrainingResult.id)).where(
                TrainingResult.session_id == started.session_id
            )
        )
        answers_count = await session.scalar(
            select(func.count(TrainingAnswer.id)).where(
                TrainingAnswer.session_id == started.session_id
            )
        )

    assert results_count == 1
    assert answers_count == 3


@pytest.mark.asyncio
async def test_leaderboard_rollup_is_aggregated_per_user_in_sql() -> None:
    base = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
    await _seed_result(user_id="alice", game_type="quiz", score=80, completed_at=base)
    await _seed_result(
        user_id="alice",
        game_type="quiz",
        score=51,
        completed_at=base + timedelta(minutes=5),
    )
    await _seed_result(
        user_id="bob",
        game_type="phishing",
        score=131,
        completed_at=base + timedelta(minutes=10),
    )

    async with SessionLocal() as session:
        rollups = await TrainingResultsRepo.rollup_scores_by_user(session, game_type="quiz")
        quiz = await get_leaderboard(session, game_type="quiz")
        overall = await get_leaderboard(session)
        unknown = await get_leaderboard(session, game_type="chess")

    assert rollups == [
        UserScoreRollup(
            user_id="alice",
            total_score=131,
            games_played=2,
            best_score=80,
            last_played=base + timedelta(minutes=5),
        )
    ]
    assert [(entry.user_id, entry.average_score) for entry in quiz.entries] == [("alice", 66)]
    assert [entry.user_id for entry in overall.entries] == ["bob", "alice"]
    assert unknown.entries == ()
