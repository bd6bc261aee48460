from __future__ import annotations

from collections.abc import Callable

from cyber_arena.game.items.catalog import GAME_TYPE_PHISHING, GAME_TYPE_QUIZ, GAME_TYPE_SCENARIO
from cyber_arena.game.items.types import PhishingItem, QuizItem, ScenarioItem, TrainingItem
from cyber_arena.game.scoring.types import ItemOutcome, SubmittedAnswer


def score_quiz_answer(item: QuizItem, submitted: SubmittedAnswer) -> ItemOutcome:
    answer = submitted.answer
    is_correct = not isinstance(answer, bool) and answer == item.correct_option
    correct_text = (
        item.options[item.correct_option] if 0 <= item.correct_option < len(item.options) else None
    )
    return ItemOutcome(
        item_id=item.item_id,
        kind=item.kind,
        submitted_answer=answer,
        correct_answer=item.correct_option,
        is_correct=is_correct,
        explanation=item.explanation,
        points_awarded=1 if is_correct else 0,
        elapsed_ms=submitted.elapsed_ms,
        correct_answer_text=correct_text,
    )


def score_phishing_answer(item: PhishingItem, submitted: SubmittedAnswer) -> ItemOutcome:
    answer = submitted.answer
    is_correct = isinstance(answer, bool) and answer == item.is_phishing
    return ItemOutcome(
        item_id=item.item_id,
        kind=item.kind,
        submitted_answer=answer,
        correct_answer=item.is_phishing,
        is_correct=is_correct,
        explanation=item.explanation,
        points_awarded=1 if is_correct else 0,
        elapsed_ms=submitted.elapsed_ms,
        red_flags=item.red_flags,
    )


def score_scenario_answer(item: ScenarioItem, submitted: SubmittedAnswer) -> ItemOutcome:
    answer = submitted.answer
    selected = None
    if not isinstance(answer, bool) and 0 <= answer < len(item.choices):
        selected = item.choices[answer]
    correct_index = item.correct_choice_index
    return ItemOutcome(
        item_id=item.item_id,
        kind=item.kind,
        submitted_answer=answer,
        correct_answer=correct_index,
        is_correct=selected is not None and selected.is_correct,
        explanation=item.explanation,
        points_awarded=selected.points if selected is not None else 0,
        elapsed_ms=submitted.elapsed_ms,
        correct_answer_text=(
            item.choices[correct_index].text if correct_index is not None else None
        ),
        feedback=selected.feedback if selected is not None else None,
    )


_RULES: dict[str, Callable[..., ItemOutcome]] = {
    GAME_TYPE_QUIZ: score_quiz_answer,
    GAME_TYPE_PHISHING: score_phishing_answer,
    GAME_TYPE_SCENARIO: score_scenario_answer,
}


def score_item(item: TrainingItem, submitted: SubmittedAnswer) -> ItemOutcome:
    return _RULES[item.kind](item, submitted)
