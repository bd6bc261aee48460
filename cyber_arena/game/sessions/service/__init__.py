from __future__ import annotations

from .session_loading import _load_owned_session, _load_progress
from .sessions_complete import complete_session, elapsed_ms_to_seconds
from .sessions_queries import get_session_progress
from .sessions_start import _resolve_session_size, start_session
from .sessions_submit import submit_answer, submit_session


class TrainingSessionService:
    _load_owned_session = staticmethod(_load_owned_session)
    _load_progress = staticmethod(_load_progress)
    _resolve_session_size = staticmethod(_resolve_session_size)
    elapsed_ms_to_seconds = staticmethod(elapsed_ms_to_seconds)
    complete_session = staticmethod(complete_session)
    start_session = staticmethod(start_session)
    get_session_progress = staticmethod(get_session_progress)
    submit_answer = staticmethod(submit_answer)
    submit_session = staticmethod(submit_session)


__all__ = [
    "TrainingSessionService",
    "complete_session",
    "get_session_progress",
    "start_session",
    "submit_answer",
    "submit_session",
]
