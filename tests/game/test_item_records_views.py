from __future__ import annotations

import pytest

from cyber_arena.game.items.records import to_training_item
from cyber_arena.game.items.types import PhishingItem, QuizItem, ScenarioItem
from cyber_arena.game.items.views import (
    PhishingItemView,
    QuizItemView,
    ScenarioItemView,
    to_client_view,
)
from tests.game.training_fixtures import _fake_item_record


def test_quiz_record_maps_to_quiz_item() -> None:
    record = _fake_item_record(
        "quiz-passwords-001",
        kind="quiz",
        prompt="Which password is strongest?",
        category="passwords",
        payload={"options": ["password123", "P@ssw0rd", "correct-horse-battery-staple"], "correct_option": 2},
    )

    item = to_training_item(record)

    assert isinstance(item, QuizItem)
    assert item.kind == "quiz"
    assert item.question == "Which password is strongest?"
    assert item.prompt == item.question
    assert item.options == ("password123", "P@ssw0rd", "correct-horse-battery-staple")
    assert item.correct_option == 2


def test_phishing_record_maps_email_and_red_flags() -> None:
    record = _fake_item_record(
        "phishing-banking-001",
        kind="phishing",
        category="banking",
        payload={
            "email": {
                "from": {"name": "Bank Security", "email": "security@bank-verify.example"},
                "to": {"name": "Customer", "email": "you@example.com"},
                "subject": "Urgent: verify your account",
                "body": "Click here within 24 hours.",
                "attachments": [{"name": "form.html", "type": "text/html", "suspicious": True}],
            },
            "is_phishing": True,
            "red_flags": [
                {"type": "urgency", "description": "Artificial deadline", "severity": "high"},
                {"type": "sender", "description": "Look-alike domain"},
            ],
        },
    )

    item = to_training_item(record)

    assert isinstance(item, PhishingItem)
    assert item.email.sender.email == "security@bank-verify.example"
    assert item.email.attachments[0].suspicious is True
    assert item.is_phishing is True
    assert [(flag.type, flag.severity) for flag in item.red_flags] == [
        ("urgency", "high"),
        ("sender", "medium"),
    ]


def test_scenario_record_defaults_choice_points() -> None:
    record = _fake_item_record(
        "scenario-malware-001",
        kind="scenario",
        category="malware",
        prompt="A USB stick is left in the parking lot.",
        payload={
            "description": "Found device",
            "choices": [
                {"text": "Plug it in", "is_correct": False, "feedback": "Risky."},
                {"text": "Hand it to IT", "is_correct": True, "feedback": "Right."},
                {"text": "Keep it", "is_correct": False, "feedback": "No.", "points": 10},
            ],
        },
    )

    item = to_training_item(record)

    assert isinstance(item, ScenarioItem)
    assert item.situation == "A USB stick is left in the parking lot."
    assert [choice.points for choice in item.choices] == [0, 100, 10]
    assert item.correct_choice_index == 1


def test_unknown_record_kind_is_rejected() -> None:
    record = _fake_item_record("x-1", kind="crossword", payload={})

    with pytest.raises(ValueError, match="unknown training item kind"):
        to_training_item(record)


def test_client_views_hide_answer_keys() -> None:
    quiz = to_training_item(
        _fake_item_record("q1", kind="quiz", payload={"options": ["A", "B"], "correct_option": 1})
    )
    phishing = to_training_item(
        _fake_item_record(
            "p1",
            kind="phishing",
            payload={
                "email": {"subject": "Hello", "body": "Body"},
                "is_phishing": True,
                "red_flags": [{"type": "link", "description": "Odd link"}],
            },
        )
    )
    scenario = to_training_item(
        _fake_item_record(
            "s1",
            kind="scenario",
            payload={
                "choices": [
                    {"text": "Yes", "is_correct": True, "feedback": "Good."},
                    {"text": "No", "is_correct": False, "feedback": "Bad."},
                ]
            },
        )
    )

    quiz_view = to_client_view(quiz)
    phishing_view = to_client_view(phishing)
    scenario_view = to_client_view(scenario)

    assert isinstance(quiz_view, QuizItemView)
    assert not hasattr(quiz_view, "correct_option")
    assert isinstance(phishing_view, PhishingItemView)
    assert not hasattr(phishing_view, "is_phishing")
    assert not hasattr(phishing_view, "red_flags")
    assert isinstance(scenario_view, ScenarioItemView)
    assert scenario_view.choices == ("Yes", "No")
