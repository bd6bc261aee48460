from cyber_arena.db.repo.training_answers_repo import TrainingAnswersRepo
from cyber_arena.db.repo.training_items_repo import TrainingItemsRepo
from cyber_arena.db.repo.training_results_repo import TrainingResultsRepo
from cyber_arena.db.repo.training_sessions_repo import TrainingSessionsRepo

__all__ = [
    "TrainingAnswersRepo",
    "TrainingItemsRepo",
    "TrainingResultsRepo",
    "TrainingSessionsRepo",
]
