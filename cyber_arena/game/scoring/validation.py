from __future__ import annotations

from cyber_arena.game.items.catalog import GAME_TYPE_PHISHING, QUIZ_NO_SELECTION
from cyber_arena.game.items.types import PhishingItem, QuizItem, ScenarioItem, TrainingItem
from cyber_arena.game.sessions.errors import InvalidAnswerPayloadError


def _require_int(answer: object) -> int:
    # bool is an int subclass but never a valid option index.
    if isinstance(answer, bool) or not isinstance(answer, int):
        raise InvalidAnswerPayloadError
    return answer


def normalize_answer(item: TrainingItem, answer: object) -> int | bool:
    """Checks the answer payload shape for the item kind and returns it typed.

    Quiz answers are an option index or ``-1`` for a timed-out question,
    phishing answers are a boolean verdict, scenario answers are a choice index.
    """
    if isinstance(item, QuizItem):
        index = _require_int(answer)
        if index == QUIZ_NO_SELECTION:
            return index
        if not 0 <= index < len(item.options):
            raise InvalidAnswerPayloadError
        return index

    if isinstance(item, PhishingItem):
        if not isinstance(answer, bool):
            raise InvalidAnswerPayloadError
        return answer

    if isinstance(item, ScenarioItem):
        index = _require_int(answer)
        if not 0 <= index < len(item.choices):
            raise InvalidAnswerPayloadError
        return index

    raise InvalidAnswerPayloadError


def normalize_unresolved_answer(game_type: str, answer: object) -> int | bool:
    """Shape check for an item that no longer resolves; scoring skips it later."""
    if game_type == GAME_TYPE_PHISHING:
        if not isinstance(answer, bool):
            raise InvalidAnswerPayloadError
        return answer
    index = _require_int(answer)
    if index < QUIZ_NO_SELECTION:
        raise InvalidAnswerPayloadError
    return index
