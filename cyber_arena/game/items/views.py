from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from cyber_arena.game.items.types import (
    PhishingEmail,
    PhishingItem,
    QuizItem,
    ScenarioItem,
    TrainingItem,
)


@dataclass(frozen=True, slots=True)
class QuizItemView:
    item_id: str
    kind: str
    category: str
    difficulty: str
    question: str
    options: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PhishingItemView:
    item_id: str
    kind: str
    category: str
    difficulty: str
    title: str
    description: str
    email: PhishingEmail


@dataclass(frozen=True, slots=True)
class ScenarioItemView:
    item_id: str
    kind: str
    category: str
    difficulty: str
    title: str
    description: str
    situation: str
    choices: tuple[str, ...]


TrainingItemView = QuizItemView | PhishingItemView | ScenarioItemView


def _quiz_view(item: QuizItem) -> QuizItemView:
    return QuizItemView(
        item_id=item.item_id,
        kind=item.kind,
        category=item.category,
        difficulty=item.difficulty,
        question=item.question,
        options=item.options,
    )


def _phishing_view(item: PhishingItem) -> PhishingItemView:
    return PhishingItemView(
        item_id=item.item_id,
        kind=item.kind,
        category=item.category,
        difficulty=item.difficulty,
        title=item.title,
        description=item.description,
        email=item.email,
    )


def _scenario_view(item: ScenarioItem) -> ScenarioItemView:
    return ScenarioItemView(
        item_id=item.item_id,
        kind=item.kind,
        category=item.category,
        difficulty=item.difficulty,
        title=item.title,
        description=item.description,
        situation=item.situation,
        choices=tuple(choice.text for choice in item.choices),
    )


_VIEW_BUILDERS: dict[str, Callable[..., TrainingItemView]] = {
    "quiz": _quiz_view,
    "phishing": _phishing_view,
    "scenario": _scenario_view,
}


def to_client_view(item: TrainingItem) -> TrainingItemView:
    """Returns the item without its answer key, explanation or red flags."""
    return _VIEW_BUILDERS[item.kind](item)
