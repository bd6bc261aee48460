from cyber_arena.db.models.training_answers import TrainingAnswer
from cyber_arena.db.models.training_items import TrainingItem
from cyber_arena.db.models.training_results import TrainingResult
from cyber_arena.db.models.training_sessions import TrainingSession

__all__ = [
    "TrainingAnswer",
    "TrainingItem",
    "TrainingResult",
    "TrainingSession",
]
