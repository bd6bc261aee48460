from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from cyber_arena.db.repo.training_answers_repo import TrainingAnswersRepo
from cyber_arena.db.repo.training_results_repo import TrainingResultsRepo
from cyber_arena.db.repo.training_sessions_repo import TrainingSessionsRepo
from cyber_arena.game.items.catalog import FILTER_ALL
from cyber_arena.game.items.sampling import sample_item_ids
from cyber_arena.game.items.types import (
    EmailParty,
    PhishingEmail,
    PhishingItem,
    QuizItem,
    RedFlag,
    ScenarioChoice,
    ScenarioItem,
    TrainingItem,
)
from cyber_arena.game.results.types import StoredResult
from cyber_arena.game.scoring.types import ItemOutcome

UTC = timezone.utc


def _quiz(
    item_id: str,
    *,
    correct_option: int = 0,
    options: tuple[str, ...] = ("A", "B", "C", "D"),
    category: str = "general",
    difficulty: str = "easy",
) -> QuizItem:
    return QuizItem(
        item_id=item_id,
        category=category,
        difficulty=difficulty,
        question=f"Question {item_id}?",
        options=options,
        correct_option=correct_option,
        explanation=f"Because {item_id}.",
    )


def _phishing(
    item_id: str,
    *,
    is_phishing: bool = True,
    category: str = "banking",
    difficulty: str = "medium",
) -> PhishingItem:
    red_flags = (
        (RedFlag(type="sender", description="Look-alike domain", severity="high"),)
        if is_phishing
        else ()
    )
    return PhishingItem(
        item_id=item_id,
        category=category,
        difficulty=difficulty,
        title=f"Mail {item_id}",
        description="Is this email legitimate?",
        email=PhishingEmail(
            sender=EmailParty(name="Bank", email="security@bank.example"),
            recipient=EmailParty(name="You", email="you@example.com"),
            subject="Account notice",
            body="Please review your account.",
        ),
        is_phishing=is_phishing,
        explanation="Check the sender domain.",
        red_flags=red_flags,
    )


def _scenario(
    item_id: str,
    *,
    correct_index: int = 0,
    points: tuple[int, ...] = (100, 25, 0),
    category: str = "social-engineering",
    difficulty: str = "hard",
) -> ScenarioItem:
    return ScenarioItem(
        item_id=item_id,
        category=category,
        difficulty=difficulty,
        title=f"Scenario {item_id}",
        description="Someone calls the help desk.",
        situation="A caller asks you to reset a password.",
        choices=tuple(
            ScenarioChoice(
                text=f"Choice {index}",
                is_correct=index == correct_index,
                feedback=f"Feedback {index}",
                points=value,
            )
            for index, value in enumerate(points)
        ),
        explanation="Verify identity through a known channel.",
    )


def _fake_item_record(
    item_id: str,
    *,
    kind: str,
    payload: dict[str, object],
    prompt: str = "Prompt?",
    title: str = "Title",
    category: str = "general",
    difficulty: str = "easy",
    explanation: str = "Explanation.",
    status: str = "ACTIVE",
) -> SimpleNamespace:
    return SimpleNamespace(
        item_id=item_id,
        kind=kind,
        category=category,
        difficulty=difficulty,
        title=title,
        prompt=prompt,
        payload=payload,
        explanation=explanation,
        status=status,
    )


def _stored_result(
    *,
    session_id: UUID,
    user_id: str,
    game_type: str = "quiz",
    score: int = 0,
    completed_at: datetime | None = None,
    outcomes: tuple[ItemOutcome, ...] = (),
) -> StoredResult:
    return StoredResult(
        session_id=session_id,
        user_id=user_id,
        game_type=game_type,
        score=score,
        correct_count=sum(1 for outcome in outcomes if outcome.is_correct),
        total_items=len(outcomes),
        total_elapsed_seconds=0,
        outcomes=outcomes,
        completed_at=completed_at or datetime(2026, 3, 1, 12, 0, tzinfo=UTC),
    )


def _quiz_outcome(item_id: str, *, is_correct: bool) -> ItemOutcome:
    return ItemOutcome(
        item_id=item_id,
        kind="quiz",
        submitted_answer=0 if is_correct else 1,
        correct_answer=0,
        is_correct=is_correct,
        explanation="",
        points_awarded=1 if is_correct else 0,
    )


def _duplicate_key_error() -> IntegrityError:
    return IntegrityError("INSERT", {}, Exception("duplicate key value violates unique constraint"))


class FakeTrainingStore:
    """In-memory stand-in for the training tables and the item repository."""

    def __init__(self, items: list[TrainingItem]) -> None:
        self.items_by_id: dict[str, TrainingItem] = {item.item_id: item for item in items}
        self.sessions: dict[UUID, object] = {}
        self.answers: dict[UUID, list[object]] = {}
        self.results: dict[UUID, object] = {}

    def install(self, monkeypatch) -> None:  # noqa: ANN001
        store = self

        async def get_session_by_id(session, session_id):  # noqa: ANN001
            del session
            return store.sessions.get(session_id)

        async def create_session(session, *, training_session):  # noqa: ANN001
            del session
            store.sessions[training_session.id] = training_session
            store.answers.setdefault(training_session.id, [])
            return training_session

        async def mark_session_completed(session, *, training_session, completed_at):  # noqa: ANN001
            del session
            training_session.status = "COMPLETED"
            training_session.completed_at = completed_at
            return training_session

        async def list_answers(session, *, session_id):  # noqa: ANN001
            del session
            return sorted(store.answers.get(session_id, []), key=lambda row: row.position)

        async def create_answer(session, *, answer):  # noqa: ANN001
            del session
            rows = store.answers.setdefault(answer.session_id, [])
            if any(row.position == answer.position or row.item_id == answer.item_id for row in rows):
                raise _duplicate_key_error()
            rows.append(answer)
            return answer

        async def get_result_by_session_id(session, *, session_id):  # noqa: ANN001
            del session
            return store.results.get(session_id)

        async def create_result(session, *, result_row):  # noqa: ANN001
            del session
            if result_row.session_id in store.results:
                raise _duplicate_key_error()
            store.results[result_row.session_id] = result_row
            return result_row

        async def get_items_by_ids(session, *, item_ids):  # noqa: ANN001
            del session
            return {
                item_id: store.items_by_id[item_id]
                for item_id in item_ids
                if item_id in store.items_by_id
            }

        async def sample_items(  # noqa: ANN001
            session,
            *,
            kind,
            category,
            difficulty,
            count,
            selection_seed,
        ):
            del session
            candidates = [
                item.item_id
                for item in store.items_by_id.values()
                if item.kind == kind
                and category in (FILTER_ALL, item.category)
                and difficulty in (FILTER_ALL, item.difficulty)
            ]
            selected = sample_item_ids(candidates, count=count, selection_seed=selection_seed)
            return [store.items_by_id[item_id] for item_id in selected]

        monkeypatch.setattr(TrainingSessionsRepo, "get_by_id", get_session_by_id)
        monkeypatch.setattr(TrainingSessionsRepo, "get_by_id_for_update", get_session_by_id)
        monkeypatch.setattr(TrainingSessionsRepo, "create", create_session)
        monkeypatch.setattr(TrainingSessionsRepo, "mark_completed", mark_session_completed)
        monkeypatch.setattr(TrainingAnswersRepo, "list_for_session", list_answers)
        monkeypatch.setattr(TrainingAnswersRepo, "create", create_answer)
        monkeypatch.setattr(TrainingResultsRepo, "get_by_session_id", get_result_by_session_id)
        monkeypatch.setattr(TrainingResultsRepo, "create", create_result)
        monkeypatch.setattr(
            "cyber_arena.game.sessions.service.sessions_submit.get_items_by_ids",
            get_items_by_ids,
        )
        monkeypatch.setattr(
            "cyber_arena.game.sessions.service.sessions_complete.get_items_by_ids",
            get_items_by_ids,
        )
        monkeypatch.setattr(
            "cyber_arena.game.sessions.service.sessions_start.sample_items",
            sample_items,
        )
