from __future__ import annotations

from datetime import datetime, timezone

import pytest

from scripts.seed_training_items import (
    DEFAULT_INPUT,
    _load_entries,
    _validate_replace_all_safety,
    build_records,
)

PROD_DB_URL = "postgresql+asyncpg://arena:secret@db:5432/cyber_arena"
NOW_UTC = datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc)


def _quiz_entry(item_id: str = "quiz-general-900", **overrides) -> dict[str, object]:  # noqa: ANN003
    entry: dict[str, object] = {
        "item_id": item_id,
        "kind": "quiz",
        "category": "General",
        "difficulty": "easy",
        "prompt": "What does MFA stand for?",
        "payload": {
            "options": ["Multi-factor authentication", "Main firewall access"],
            "correct_option": 0,
        },
        "explanation": "MFA combines independent factors.",
    }
    entry.update(overrides)
    return entry


def test_validate_replace_all_safety_skips_when_replace_all_is_disabled() -> None:
    _validate_replace_all_safety(
        app_env="production",
        database_url=PROD_DB_URL,
        replace_all=False,
        confirmation_value="",
        expected_db_name="",
    )


def test_validate_replace_all_safety_skips_outside_production() -> None:
    _validate_replace_all_safety(
        app_env="dev",
        database_url=PROD_DB_URL,
        replace_all=True,
        confirmation_value="",
        expected_db_name="",
    )


@pytest.mark.parametrize("app_env", ["production", "prod", " PROD "])
def test_validate_replace_all_safety_rejects_missing_confirmation(app_env: str) -> None:
    with pytest.raises(RuntimeError, match="explicit confirmation"):
        _validate_replace_all_safety(
            app_env=app_env,
            database_url=PROD_DB_URL,
            replace_all=True,
            confirmation_value="",
            expected_db_name="cyber_arena",
        )


def test_validate_replace_all_safety_rejects_db_name_mismatch() -> None:
    with pytest.raises(RuntimeError, match="expected DB name mismatch"):
        _validate_replace_all_safety(
            app_env="production",
            database_url=PROD_DB_URL,
            replace_all=True,
            confirmation_value="PROD_REPLACE_ALL_OK",
            expected_db_name="wrong_db",
        )


def test_validate_replace_all_safety_accepts_confirmed_matching_db() -> None:
    _validate_replace_all_safety(
        app_env="production",
        database_url=PROD_DB_URL,
        replace_all=True,
        confirmation_value="PROD_REPLACE_ALL_OK",
        expected_db_name="cyber_arena",
    )


def test_bundled_content_file_is_importable() -> None:
    records, summary, by_kind = build_records(_load_entries(DEFAULT_INPUT), now_utc=NOW_UTC)

    assert summary.total_entries_read == summary.total_entries_imported == len(records)
    assert by_kind == {"quiz": 10, "phishing": 6, "scenario": 7}
    assert all(record["status"] == "ACTIVE" for record in records)
    assert len({record["item_id"] for record in records}) == len(records)


def test_build_records_normalizes_category_and_defaults_title() -> None:
    records, _, _ = build_records([_quiz_entry()], now_utc=NOW_UTC)

    assert records[0]["category"] == "general"
    assert records[0]["title"] == "What does MFA stand for?"
    assert records[0]["created_at"] == NOW_UTC


def test_build_records_rejects_duplicate_item_ids() -> None:
    with pytest.raises(ValueError, match="duplicate item_id"):
        build_records([_quiz_entry(), _quiz_entry()], now_utc=NOW_UTC)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"kind": "crossword"}, "unknown kind"),
        ({"category": "banking"}, "not valid for quiz"),
        ({"difficulty": "extreme"}, "invalid difficulty"),
        ({"prompt": "  "}, "empty prompt"),
        ({"payload": {"options": ["only one"], "correct_option": 0}}, "at least 2 options"),
        ({"payload": {"options": ["A", "B"], "correct_option": 2}}, "invalid correct_option"),
        ({"payload": {"options": ["A", "B"], "correct_option": True}}, "must be an integer"),
    ],
)
def test_build_records_rejects_invalid_quiz_entries(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        build_records([_quiz_entry(**overrides)], now_utc=NOW_UTC)


def test_build_records_rejects_legitimate_email_with_red_flags() -> None:
    entry = {
        "item_id": "phishing-work-900",
        "kind": "phishing",
        "category": "work",
        "prompt": "Is this email legitimate?",
        "payload": {
            "email": {"subject": "Payroll", "body": "Your payslip is ready in the portal."},
            "is_phishing": False,
            "red_flags": [{"type": "link", "description": "Odd link"}],
        },
    }

    with pytest.raises(ValueError, match="cannot carry red flags"):
        build_records([entry], now_utc=NOW_UTC)


def test_build_records_requires_single_correct_scenario_choice() -> None:
    entry = {
        "item_id": "scenario-malware-900",
        "kind": "scenario",
        "category": "malware",
        "prompt": "A pop-up claims your laptop is infected.",
        "payload": {
            "choices": [
                {"text": "Call the number", "is_correct": True},
                {"text": "Report to IT", "is_correct": True},
            ]
        },
    }

    with pytest.raises(ValueError, match="exactly one correct choice"):
        build_records([entry], now_utc=NOW_UTC)
