from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import structlog
from fastapi import APIRouter, Request

from cyber_arena.db.session import SessionLocal
from cyber_arena.game.leaderboard.notifier import leaderboard_notifier
from cyber_arena.game.scoring.types import SubmittedAnswer
from cyber_arena.game.sessions.errors import TrainingSessionError
from cyber_arena.game.sessions.service import TrainingSessionService
from cyber_arena.game.sessions.types import SubmitAnswerResult

from .caller_access import _require_caller
from .training_helpers import (
    _as_progress_response,
    _as_start_response,
    _as_submit_response,
    _http_error_for,
)
from .training_models import (
    SessionProgressResponse,
    StartSessionRequest,
    StartSessionResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
    SubmitSessionRequest,
)

router = APIRouter(tags=["training"])
logger = structlog.get_logger(__name__)


def _notify_if_completed(result: SubmitAnswerResult) -> None:
    # Called only after the session transaction has committed.
    if result.result is not None:
        leaderboard_notifier.schedule_result_recorded(result.result)


@router.post("/training/sessions", response_model=StartSessionResponse, status_code=201)
async def start_training_session(
    payload: StartSessionRequest,
    request: Request,
) -> StartSessionResponse:
    caller = _require_caller(request)
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await TrainingSessionService.start_session(
                session,
                user_id=caller.user_id,
                game_type=payload.game_type,
                category=payload.category,
                difficulty=payload.difficulty,
                count=payload.count,
                now_utc=now_utc,
            )
    except TrainingSessionError as exc:
        raise _http_error_for(exc) from exc

    return _as_start_response(result)


@router.get("/training/sessions/{session_id}", response_model=SessionProgressResponse)
async def get_training_session(session_id: UUID, request: Request) -> SessionProgressResponse:
    caller = _require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            progress = await TrainingSessionService.get_session_progress(
                session,
                user_id=caller.user_id,
                session_id=session_id,
            )
    except TrainingSessionError as exc:
        raise _http_error_for(exc) from exc

    return _as_progress_response(progress)


@router.post(
    "/training/sessions/{session_id}/answers",
    response_model=SubmitAnswerResponse,
)
async def submit_training_answer(
    session_id: UUID,
    payload: SubmitAnswerRequest,
    request: Request,
) -> SubmitAnswerResponse:
    caller = _require_caller(request)
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await TrainingSessionService.submit_answer(
                session,
                user_id=caller.user_id,
                session_id=session_id,
                item_id=payload.item_id,
                answer=payload.answer,
                elapsed_ms=payload.elapsed_ms,
                now_utc=now_utc,
            )
    except TrainingSessionError as exc:
        http_exc = _http_error_for(exc)
        logger.info(
            "training_answer_rejected",
            session_id=str(session_id),
            item_id=payload.item_id,
            code=http_exc.detail["code"],  # type: ignore[index]
        )
        raise http_exc from exc

    _notify_if_completed(result)
    return _as_submit_response(result)


@router.post(
    "/training/sessions/{session_id}/submit",
    response_model=SubmitAnswerResponse,
)
async def submit_training_session(
    session_id: UUID,
    payload: SubmitSessionRequest,
    request: Request,
) -> SubmitAnswerResponse:
    caller = _require_caller(request)
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await TrainingSessionService.submit_session(
                session,
                user_id=caller.user_id,
                session_id=session_id,
                answers=[
                    SubmittedAnswer(
                        item_id=answer.item_id,
                        answer=answer.answer,
                        elapsed_ms=answer.elapsed_ms,
                    )
                    for answer in payload.answers
                ],
                total_elapsed_seconds=payload.total_elapsed_seconds,
                now_utc=now_utc,
            )
    except TrainingSessionError as exc:
        raise _http_error_for(exc) from exc

    _notify_if_completed(result)
    return _as_submit_response(result)
