from __future__ import annotations

from collections.abc import Mapping, Sequence

from cyber_arena.game.items.catalog import GAME_TYPE_SCENARIO
from cyber_arena.game.items.types import TrainingItem
from cyber_arena.game.scoring.rules import score_item
from cyber_arena.game.scoring.types import ItemOutcome, ScoredSession, SubmittedAnswer


def percent_half_up(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


def score_session(
    *,
    game_type: str,
    answers: Sequence[SubmittedAnswer],
    items_by_id: Mapping[str, TrainingItem],
) -> ScoredSession:
    """Scores answers against the authoritative items.

    Answers whose item no longer resolves, or resolves to another kind, are
    skipped and do not count towards the total.
    """
    outcomes: list[ItemOutcome] = []
    for submitted in answers:
        item = items_by_id.get(submitted.item_id)
        if item is None or item.kind != game_type:
            continue
        outcomes.append(score_item(item, submitted))

    total = len(outcomes)
    correct = sum(1 for outcome in outcomes if outcome.is_correct)
    if total == 0:
        score = 0
    elif game_type == GAME_TYPE_SCENARIO:
        score = sum(outcome.points_awarded for outcome in outcomes)
    else:
        score = percent_half_up(correct, total)

    return ScoredSession(
        game_type=game_type,
        score=score,
        correct_count=correct,
        total_items=total,
        outcomes=tuple(outcomes),
    )
