from __future__ import annotations

from dataclasses import dataclass, field

from cyber_arena.game.items.types import RedFlag


@dataclass(frozen=True, slots=True)
class SubmittedAnswer:
    item_id: str
    answer: int | bool
    elapsed_ms: int = 0


@dataclass(frozen=True, slots=True)
class ItemOutcome:
    item_id: str
    kind: str
    submitted_answer: int | bool
    correct_answer: int | bool | None
    is_correct: bool
    explanation: str
    points_awarded: int = 0
    elapsed_ms: int = 0
    red_flags: tuple[RedFlag, ...] = ()
    correct_answer_text: str | None = None
    feedback: str | None = None

    def to_record(self) -> dict[str, object]:
        return {
            "item_id": self.item_id,
            "kind": self.kind,
            "submitted_answer": self.submitted_answer,
            "correct_answer": self.correct_answer,
            "is_correct": self.is_correct,
            "explanation": self.explanation,
            "points_awarded": self.points_awarded,
            "elapsed_ms": self.elapsed_ms,
            "red_flags": [
                {"type": flag.type, "description": flag.description, "severity": flag.severity}
                for flag in self.red_flags
            ],
            "correct_answer_text": self.correct_answer_text,
            "feedback": self.feedback,
        }


@dataclass(frozen=True, slots=True)
class ScoredSession:
    game_type: str
    score: int
    correct_count: int
    total_items: int
    outcomes: tuple[ItemOutcome, ...] = field(default_factory=tuple)

    @property
    def correctness(self) -> list[bool]:
        return [outcome.is_correct for outcome in self.outcomes]


def outcome_from_record(raw: dict[str, object]) -> ItemOutcome:
    return ItemOutcome(
        item_id=str(raw.get("item_id") or ""),
        kind=str(raw.get("kind") or ""),
        submitted_answer=raw.get("submitted_answer"),  # type: ignore[arg-type]
        correct_answer=raw.get("correct_answer"),  # type: ignore[arg-type]
        is_correct=bool(raw.get("is_correct", False)),
        explanation=str(raw.get("explanation") or ""),
        points_awarded=int(raw.get("points_awarded") or 0),  # type: ignore[arg-type]
        elapsed_ms=int(raw.get("elapsed_ms") or 0),  # type: ignore[arg-type]
        red_flags=tuple(
            RedFlag(
                type=str(flag.get("type") or ""),
                description=str(flag.get("description") or ""),
                severity=str(flag.get("severity") or "medium"),
            )
            for flag in (raw.get("red_flags") or [])  # type: ignore[union-attr]
        ),
        correct_answer_text=raw.get("correct_answer_text"),  # type: ignore[arg-type]
        feedback=raw.get("feedback"),  # type: ignore[arg-type]
    )
