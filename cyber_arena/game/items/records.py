from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from cyber_arena.db.models.training_items import TrainingItem as TrainingItemRecord
from cyber_arena.game.items.catalog import (
    DEFAULT_SCENARIO_CORRECT_POINTS,
    GAME_TYPE_PHISHING,
    GAME_TYPE_QUIZ,
    GAME_TYPE_SCENARIO,
)
from cyber_arena.game.items.types import (
    EmailAttachment,
    EmailParty,
    PhishingEmail,
    PhishingItem,
    QuizItem,
    RedFlag,
    ScenarioChoice,
    ScenarioItem,
    TrainingItem,
)


def _party(raw: Mapping[str, Any] | None) -> EmailParty:
    raw = raw or {}
    return EmailParty(name=str(raw.get("name") or ""), email=str(raw.get("email") or ""))


def _red_flags(raw: Any) -> tuple[RedFlag, ...]:
    return tuple(
        RedFlag(
            type=str(entry.get("type") or ""),
            description=str(entry.get("description") or ""),
            severity=str(entry.get("severity") or "medium"),
        )
        for entry in (raw or [])
    )


def _choice(raw: Mapping[str, Any]) -> ScenarioChoice:
    is_correct = bool(raw.get("is_correct", False))
    points = raw.get("points")
    if points is None:
        points = DEFAULT_SCENARIO_CORRECT_POINTS if is_correct else 0
    return ScenarioChoice(
        text=str(raw.get("text") or ""),
        is_correct=is_correct,
        feedback=str(raw.get("feedback") or ""),
        points=int(points),
    )


def _quiz_from_record(record: TrainingItemRecord) -> QuizItem:
    payload = record.payload
    return QuizItem(
        item_id=record.item_id,
        category=record.category,
        difficulty=record.difficulty,
        question=record.prompt,
        options=tuple(str(option) for option in payload.get("options", [])),
        correct_option=int(payload["correct_option"]),
        explanation=record.explanation,
    )


def _phishing_from_record(record: TrainingItemRecord) -> PhishingItem:
    payload = record.payload
    email = payload.get("email") or {}
    return PhishingItem(
        item_id=record.item_id,
        category=record.category,
        difficulty=record.difficulty,
        title=record.title,
        description=record.prompt,
        email=PhishingEmail(
            sender=_party(email.get("from")),
            recipient=_party(email.get("to")),
            subject=str(email.get("subject") or ""),
            body=str(email.get("body") or ""),
            attachments=tuple(
                EmailAttachment(
                    name=str(attachment.get("name") or ""),
                    type=str(attachment.get("type") or ""),
                    suspicious=bool(attachment.get("suspicious", False)),
                )
                for attachment in (email.get("attachments") or [])
            ),
        ),
        is_phishing=bool(payload["is_phishing"]),
        explanation=record.explanation,
        red_flags=_red_flags(payload.get("red_flags")),
    )


def _scenario_from_record(record: TrainingItemRecord) -> ScenarioItem:
    payload = record.payload
    return ScenarioItem(
        item_id=record.item_id,
        category=record.category,
        difficulty=record.difficulty,
        title=record.title,
        description=str(payload.get("description") or ""),
        situation=record.prompt,
        choices=tuple(_choice(raw) for raw in payload.get("choices", [])),
        explanation=record.explanation,
    )


_BUILDERS: dict[str, Callable[[TrainingItemRecord], TrainingItem]] = {
    GAME_TYPE_QUIZ: _quiz_from_record,
    GAME_TYPE_PHISHING: _phishing_from_record,
    GAME_TYPE_SCENARIO: _scenario_from_record,
}


def to_training_item(record: TrainingItemRecord) -> TrainingItem:
    builder = _BUILDERS.get(record.kind)
    if builder is None:
        raise ValueError(f"unknown training item kind: {record.kind}")
    return builder(record)
