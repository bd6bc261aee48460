from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field, StrictBool, StrictInt


class StartSessionRequest(BaseModel):
    game_type: str = Field(min_length=1, max_length=16)
    category: str | None = Field(default=None, max_length=64)
    difficulty: str | None = Field(default=None, max_length=16)
    count: int | None = Field(default=None, ge=1)


class EmailPartyResponse(BaseModel):
    name: str
    email: str


class EmailAttachmentResponse(BaseModel):
    name: str
    type: str
    suspicious: bool


class PhishingEmailResponse(BaseModel):
    sender: EmailPartyResponse
    recipient: EmailPartyResponse
    subject: str
    body: str
    attachments: list[EmailAttachmentResponse]


class QuizItemResponse(BaseModel):
    kind: Literal["quiz"]
    item_id: str
    category: str
    difficulty: str
    question: str
    options: list[str]


class PhishingItemResponse(BaseModel):
    kind: Literal["phishing"]
    item_id: str
    category: str
    difficulty: str
    title: str
    description: str
    email: PhishingEmailResponse


class ScenarioItemResponse(BaseModel):
    kind: Literal["scenario"]
    item_id: str
    category: str
    difficulty: str
    title: str
    description: str
    situation: str
    choices: list[str]


TrainingItemResponse = Annotated[
    QuizItemResponse | PhishingItemResponse | ScenarioItemResponse,
    Field(discriminator="kind"),
]


class StartSessionResponse(BaseModel):
    session_id: UUID
    game_type: str
    category: str
    difficulty: str
    item_time_budget_ms: int | None = None
    timeout_answer: int | bool | None = None
    total_items: int = Field(ge=0)
    items: list[TrainingItemResponse]
    started_at: datetime


class RedFlagResponse(BaseModel):
    type: str
    description: str
    severity: str


class ItemOutcomeResponse(BaseModel):
    item_id: str
    kind: str
    submitted_answer: int | bool | None = None
    correct_answer: int | bool | None = None
    is_correct: bool
    explanation: str
    points_awarded: int
    elapsed_ms: int = Field(ge=0)
    red_flags: list[RedFlagResponse]
    correct_answer_text: str | None = None
    feedback: str | None = None


class SessionResultResponse(BaseModel):
    session_id: UUID
    game_type: str
    score: int = Field(ge=0)
    correct_count: int = Field(ge=0)
    total_items: int = Field(ge=0)
    total_elapsed_seconds: int = Field(ge=0)
    outcomes: list[ItemOutcomeResponse]
    completed_at: datetime


class SessionProgressResponse(BaseModel):
    session_id: UUID
    game_type: str
    status: str
    current_index: int = Field(ge=0)
    total_items: int = Field(ge=0)
    next_item_id: str | None = None
    answered_item_ids: list[str]
    item_time_budget_ms: int | None = None
    started_at: datetime
    completed_at: datetime | None = None
    result: SessionResultResponse | None = None


class SubmitAnswerRequest(BaseModel):
    item_id: str = Field(min_length=1, max_length=64)
    answer: StrictBool | StrictInt
    elapsed_ms: int = Field(default=0, ge=0)


class ScenarioFeedbackResponse(BaseModel):
    item_id: str
    is_correct: bool
    points_awarded: int
    feedback: str | None = None
    correct_choice_text: str | None = None
    explanation: str


class SubmitAnswerResponse(BaseModel):
    session_id: UUID
    item_id: str
    position: int = Field(ge=0)
    status: str
    next_item_id: str | None = None
    feedback: ScenarioFeedbackResponse | None = None
    result: SessionResultResponse | None = None


class SubmitSessionRequest(BaseModel):
    answers: list[SubmitAnswerRequest] = Field(max_length=100)
    total_elapsed_seconds: int | None = Field(default=None, ge=0)


class LeaderboardEntryResponse(BaseModel):
    rank: int = Field(ge=1)
    user_id: str
    total_score: int
    games_played: int = Field(ge=1)
    average_score: int
    best_score: int
    last_played: datetime


class LeaderboardResponse(BaseModel):
    game_type: str
    limit: int = Field(ge=1, le=100)
    entries: list[LeaderboardEntryResponse]


class AnalyticsOverviewResponse(BaseModel):
    active_users: int = Field(ge=0)
    total_items: int = Field(ge=0)
    items_by_kind: dict[str, int]
    total_sessions: int = Field(ge=0)


class GameTypeScoreResponse(BaseModel):
    game_type: str
    average_score: float = Field(ge=0.0)
    total_sessions: int = Field(ge=1)


class MissedItemResponse(BaseModel):
    item_id: str
    missed_count: int = Field(ge=1)
    prompt: str
    category: str
    difficulty: str


class DailyActivityResponse(BaseModel):
    day: date
    sessions: int = Field(ge=1)
    unique_users: int = Field(ge=1)


class RecentSessionResponse(BaseModel):
    session_id: UUID
    user_id: str
    game_type: str
    score: int
    completed_at: datetime


class AnalyticsSnapshotResponse(BaseModel):
    generated_at: datetime
    overview: AnalyticsOverviewResponse
    scores_by_game_type: list[GameTypeScoreResponse]
    most_missed: list[MissedItemResponse]
    daily_activity: list[DailyActivityResponse]
    recent_sessions: list[RecentSessionResponse]
