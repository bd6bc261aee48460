from __future__ import annotations

import pytest

from cyber_arena.game.items.catalog import QUIZ_NO_SELECTION
from cyber_arena.game.scoring.engine import percent_half_up, score_session
from cyber_arena.game.scoring.rules import score_item
from cyber_arena.game.scoring.types import SubmittedAnswer
from cyber_arena.game.scoring.validation import normalize_answer, normalize_unresolved_answer
from cyber_arena.game.sessions.errors import InvalidAnswerPayloadError
from tests.game.training_fixtures import _phishing, _quiz, _scenario


def test_score_session_quiz_counts_correct_answers_and_rounds_percentage() -> None:
    items = {
        "q1": _quiz("q1", correct_option=1),
        "q2": _quiz("q2", correct_option=0),
        "q3": _quiz("q3", correct_option=2),
    }

    scored = score_session(
        game_type="quiz",
        answers=[
            SubmittedAnswer(item_id="q1", answer=1),
            SubmittedAnswer(item_id="q2", answer=1),
            SubmittedAnswer(item_id="q3", answer=2),
        ],
        items_by_id=items,
    )

    assert scored.correct_count == 2
    assert scored.total_items == 3
    assert scored.score == 67
    assert scored.correctness == [True, False, True]


def test_score_session_without_answers_scores_zero() -> None:
    scored = score_session(game_type="quiz", answers=[], items_by_id={})

    assert scored.score == 0
    assert scored.correct_count == 0
    assert scored.total_items == 0
    assert scored.outcomes == ()


def test_score_session_skips_unresolved_and_foreign_items() -> None:
    items = {
        "q1": _quiz("q1", correct_option=0),
        "p1": _phishing("p1"),
    }

    scored = score_session(
        game_type="quiz",
        answers=[
            SubmittedAnswer(item_id="q1", answer=0),
            SubmittedAnswer(item_id="missing", answer=0),
            SubmittedAnswer(item_id="p1", answer=True),
        ],
        items_by_id=items,
    )

    assert scored.total_items == 1
    assert scored.correct_count == 1
    assert scored.score == 100
    assert [outcome.item_id for outcome in scored.outcomes] == ["q1"]


def test_quiz_timeout_sentinel_is_scored_incorrect() -> None:
    item = _quiz("q1", correct_option=0)

    outcome = score_item(item, SubmittedAnswer(item_id="q1", answer=QUIZ_NO_SELECTION, elapsed_ms=30_000))

    assert outcome.is_correct is False
    assert outcome.submitted_answer == -1
    assert outcome.correct_answer == 0
    assert outcome.correct_answer_text == "A"
    assert outcome.points_awarded == 0


def test_phishing_false_positive_returns_empty_red_flags() -> None:
    item = _phishing("p1", is_phishing=False)

    outcome = score_item(item, SubmittedAnswer(item_id="p1", answer=True))

    assert outcome.is_correct is False
    assert outcome.correct_answer is False
    assert outcome.red_flags == ()
    assert outcome.to_record()["red_flags"] == []


def test_phishing_verdict_keeps_red_flags_for_phishing_item() -> None:
    item = _phishing("p1", is_phishing=True)

    outcome = score_item(item, SubmittedAnswer(item_id="p1", answer=True))

    assert outcome.is_correct is True
    assert [flag.type for flag in outcome.red_flags] == ["sender"]


def test_scenario_score_sums_choice_points() -> None:
    items = {
        "s1": _scenario("s1", correct_index=0, points=(100, 25, 0)),
        "s2": _scenario("s2", correct_index=2, points=(0, 40, 100)),
    }

    scored = score_session(
        game_type="scenario",
        answers=[
            SubmittedAnswer(item_id="s1", answer=1),
            SubmittedAnswer(item_id="s2", answer=2),
        ],
        items_by_id=items,
    )

    assert scored.score == 125
    assert scored.correct_count == 1
    assert scored.correctness == [False, True]
    assert scored.outcomes[0].feedback == "Feedback 1"
    assert scored.outcomes[0].correct_answer_text == "Choice 0"


@pytest.mark.parametrize(
    ("numerator", "denominator", "expected"),
    [
        (1, 2, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (5, 5, 100),
        (0, 7, 0),
        (3, 0, 0),
    ],
)
def test_percent_half_up(numerator: int, denominator: int, expected: int) -> None:
    assert percent_half_up(numerator, denominator) == expected


def test_quiz_scores_stay_within_percentage_range() -> None:
    items = {f"q{index}": _quiz(f"q{index}", correct_option=index % 4) for index in range(7)}
    for correct_upto in range(8):
        answers = [
            SubmittedAnswer(
                item_id=f"q{index}",
                answer=index % 4 if index < correct_upto else QUIZ_NO_SELECTION,
            )
            for index in range(7)
        ]
        scored = score_session(game_type="quiz", answers=answers, items_by_id=items)

        assert scored.correct_count == correct_upto
        assert scored.score == percent_half_up(correct_upto, 7)
        assert 0 <= scored.score <= 100


def test_normalize_answer_checks_shape_per_kind() -> None:
    assert normalize_answer(_quiz("q1"), 3) == 3
    assert normalize_answer(_quiz("q1"), QUIZ_NO_SELECTION) == QUIZ_NO_SELECTION
    assert normalize_answer(_phishing("p1"), False) is False
    assert normalize_answer(_scenario("s1"), 2) == 2


@pytest.mark.parametrize(
    ("item", "answer"),
    [
        (_quiz("q1"), 4),
        (_quiz("q1"), -2),
        (_quiz("q1"), True),
        (_quiz("q1"), "1"),
        (_phishing("p1"), 1),
        (_phishing("p1"), None),
        (_scenario("s1"), -1),
        (_scenario("s1"), 3),
        (_scenario("s1"), False),
    ],
)
def test_normalize_answer_rejects_malformed_payload(item, answer) -> None:  # noqa: ANN001
    with pytest.raises(InvalidAnswerPayloadError):
        normalize_answer(item, answer)


def test_normalize_unresolved_answer_only_checks_type() -> None:
    assert normalize_unresolved_answer("quiz", 7) == 7
    assert normalize_unresolved_answer("phishing", True) is True
    with pytest.raises(InvalidAnswerPayloadError):
        normalize_unresolved_answer("phishing", 0)
    with pytest.raises(InvalidAnswerPayloadError):
        normalize_unresolved_answer("scenario", -5)
