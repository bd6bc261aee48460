from __future__ import annotations

GAME_TYPE_QUIZ = "quiz"
GAME_TYPE_PHISHING = "phishing"
GAME_TYPE_SCENARIO = "scenario"
GAME_TYPES: tuple[str, ...] = (GAME_TYPE_QUIZ, GAME_TYPE_PHISHING, GAME_TYPE_SCENARIO)

LEADERBOARD_OVERALL = "overall"
FILTER_ALL = "all"

ITEM_STATUS_ACTIVE = "ACTIVE"
ITEM_STATUS_DISABLED = "DISABLED"

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
CATEGORIES_BY_GAME_TYPE: dict[str, tuple[str, ...]] = {
    GAME_TYPE_QUIZ: ("general", "phishing", "passwords", "malware", "social-engineering"),
    GAME_TYPE_PHISHING: ("banking", "social-media", "work", "shopping", "government"),
    GAME_TYPE_SCENARIO: ("phishing", "social-engineering", "data-breach", "malware"),
}
RED_FLAG_SEVERITIES: tuple[str, ...] = ("low", "medium", "high")

DEFAULT_SESSION_SIZE: dict[str, int] = {
    GAME_TYPE_QUIZ: 10,
    GAME_TYPE_PHISHING: 5,
    GAME_TYPE_SCENARIO: 5,
}
# None means the item is untimed.
ITEM_TIME_BUDGET_MS: dict[str, int | None] = {
    GAME_TYPE_QUIZ: 30_000,
    GAME_TYPE_PHISHING: 60_000,
    GAME_TYPE_SCENARIO: None,
}

# Submitted by the client when the quiz timer runs out; never matches a correct option.
QUIZ_NO_SELECTION = -1
# Submitted by the client when the phishing timer runs out: "legitimate".
PHISHING_DEFAULT_ANSWER = False

DEFAULT_SCENARIO_CORRECT_POINTS = 100


def is_game_type(value: str) -> bool:
    return value in GAME_TYPES


def normalize_filter(value: str | None) -> str:
    if value is None:
        return FILTER_ALL
    normalized = value.strip().lower()
    return normalized or FILTER_ALL


def default_answer_for(game_type: str) -> int | bool | None:
    if game_type == GAME_TYPE_QUIZ:
        return QUIZ_NO_SELECTION
    if game_type == GAME_TYPE_PHISHING:
        return PHISHING_DEFAULT_ANSWER
    return None
