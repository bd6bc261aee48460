from __future__ import annotations

from fastapi import HTTPException

from cyber_arena.game.items.views import (
    PhishingItemView,
    QuizItemView,
    ScenarioItemView,
    TrainingItemView,
)
from cyber_arena.game.results.types import StoredResult
from cyber_arena.game.scoring.types import ItemOutcome
from cyber_arena.game.sessions.errors import (
    DuplicateAnswerError,
    IncompleteSubmissionError,
    InvalidAnswerPayloadError,
    InvalidGameTypeError,
    InvalidSessionSizeError,
    ItemNotInSessionError,
    ItemOutOfOrderError,
    ItemTimeBudgetExceededError,
    SessionAlreadyCompletedError,
    SessionNotFoundError,
    TrainingSessionError,
)
from cyber_arena.game.sessions.types import (
    ScenarioFeedback,
    StartTrainingSessionResult,
    SubmitAnswerResult,
    TrainingSessionProgress,
)

from .training_models import (
    EmailAttachmentResponse,
    EmailPartyResponse,
    ItemOutcomeResponse,
    PhishingEmailResponse,
    PhishingItemResponse,
    QuizItemResponse,
    RedFlagResponse,
    ScenarioFeedbackResponse,
    ScenarioItemResponse,
    SessionProgressResponse,
    SessionResultResponse,
    StartSessionResponse,
    SubmitAnswerResponse,
)

_ERROR_CODES: tuple[tuple[type[TrainingSessionError], int, str], ...] = (
    (InvalidGameTypeError, 422, "E_INVALID_GAME_TYPE"),
    (InvalidSessionSizeError, 422, "E_INVALID_SESSION_SIZE"),
    (ItemTimeBudgetExceededError, 422, "E_TIME_BUDGET_EXCEEDED"),
    (ItemNotInSessionError, 422, "E_ITEM_OUT_OF_ORDER"),
    (ItemOutOfOrderError, 422, "E_ITEM_OUT_OF_ORDER"),
    (DuplicateAnswerError, 422, "E_ITEM_OUT_OF_ORDER"),
    (InvalidAnswerPayloadError, 422, "E_INVALID_ANSWER"),
    (IncompleteSubmissionError, 422, "E_INVALID_ANSWER"),
    (SessionNotFoundError, 404, "E_SESSION_NOT_FOUND"),
    (SessionAlreadyCompletedError, 409, "E_SESSION_COMPLETED"),
)


def _http_error_for(exc: TrainingSessionError) -> HTTPException:
    for error_type, status_code, code in _ERROR_CODES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail={"code": code})
    return HTTPException(status_code=422, detail={"code": "E_INVALID_ANSWER"})


def _as_item_response(
    view: TrainingItemView,
) -> QuizItemResponse | PhishingItemResponse | ScenarioItemResponse:
    if isinstance(view, QuizItemView):
        return QuizItemResponse(
            kind="quiz",
            item_id=view.item_id,
            category=view.category,
            difficulty=view.difficulty,
            question=view.question,
            options=list(view.options),
        )
    if isinstance(view, PhishingItemView):
        email = view.email
        return PhishingItemResponse(
            kind="phishing",
            item_id=view.item_id,
            category=view.category,
            difficulty=view.difficulty,
            title=view.title,
            description=view.description,
            email=PhishingEmailResponse(
                sender=EmailPartyResponse(name=email.sender.name, email=email.sender.email),
                recipient=EmailPartyResponse(
                    name=email.recipient.name,
                    email=email.recipient.email,
                ),
                subject=email.subject,
                body=email.body,
                attachments=[
                    EmailAttachmentResponse(
                        name=attachment.name,
                        type=attachment.type,
                        suspicious=attachment.suspicious,
                    )
                    for attachment in email.attachments
                ],
            ),
        )
    assert isinstance(view, ScenarioItemView)
    return ScenarioItemResponse(
        kind="scenario",
        item_id=view.item_id,
        category=view.category,
        difficulty=view.difficulty,
        title=view.title,
        description=view.description,
        situation=view.situation,
        choices=list(view.choices),
    )


def _as_outcome_response(outcome: ItemOutcome) -> ItemOutcomeResponse:
    return ItemOutcomeResponse(
        item_id=outcome.item_id,
        kind=outcome.kind,
        submitted_answer=outcome.submitted_answer,
        correct_answer=outcome.correct_answer,
        is_correct=outcome.is_correct,
        explanation=outcome.explanation,
        points_awarded=outcome.points_awarded,
        elapsed_ms=outcome.elapsed_ms,
        red_flags=[
            RedFlagResponse(type=flag.type, description=flag.description, severity=flag.severity)
            for flag in outcome.red_flags
        ],
        correct_answer_text=outcome.correct_answer_text,
        feedback=outcome.feedback,
    )


def _as_result_response(result: StoredResult | None) -> SessionResultResponse | None:
    if result is None:
        return None
    return SessionResultResponse(
        session_id=result.session_id,
        game_type=result.game_type,
        score=result.score,
        correct_count=result.correct_count,
        total_items=result.total_items,
        total_elapsed_seconds=result.total_elapsed_seconds,
        outcomes=[_as_outcome_response(outcome) for outcome in result.outcomes],
        completed_at=result.completed_at,
    )


def _as_feedback_response(feedback: ScenarioFeedback | None) -> ScenarioFeedbackResponse | None:
    if feedback is None:
        return None
    return ScenarioFeedbackResponse(
        item_id=feedback.item_id,
        is_correct=feedback.is_correct,
        points_awarded=feedback.points_awarded,
        feedback=feedback.feedback,
        correct_choice_text=feedback.correct_choice_text,
        explanation=feedback.explanation,
    )


def _as_start_response(result: StartTrainingSessionResult) -> StartSessionResponse:
    return StartSessionResponse(
        session_id=result.session_id,
        game_type=result.game_type,
        category=result.category,
        difficulty=result.difficulty,
        item_time_budget_ms=result.item_time_budget_ms,
        timeout_answer=result.timeout_answer,
        total_items=result.total_items,
        items=[_as_item_response(view) for view in result.items],
        started_at=result.started_at,
    )


def _as_progress_response(progress: TrainingSessionProgress) -> SessionProgressResponse:
    return SessionProgressResponse(
        session_id=progress.session_id,
        game_type=progress.game_type,
        status=progress.status,
        current_index=progress.current_index,
        total_items=progress.total_items,
        next_item_id=progress.next_item_id,
        answered_item_ids=list(progress.answered_item_ids),
        item_time_budget_ms=progress.item_time_budget_ms,
        started_at=progress.started_at,
        completed_at=progress.completed_at,
        result=_as_result_response(progress.result),
    )


def _as_submit_response(result: SubmitAnswerResult) -> SubmitAnswerResponse:
    return SubmitAnswerResponse(
        session_id=result.session_id,
        item_id=result.item_id,
        position=result.position,
        status=result.status,
        next_item_id=result.next_item_id,
        feedback=_as_feedback_response(result.feedback),
        result=_as_result_response(result.result),
    )
