"""In-process topic registry for leaderboard change notifications.

Subscribers register an async callback per topic. Publishing never raises:
a failing subscriber is logged and the remaining subscribers still run.
`schedule_result_recorded` runs the publish as a tracked background task so
the caller never waits on subscribers.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

import structlog

from cyber_arena.game.items.catalog import LEADERBOARD_OVERALL
from cyber_arena.game.leaderboard.types import LeaderboardChangedEvent
from cyber_arena.game.results.types import StoredResult

logger = structlog.get_logger(__name__)

LeaderboardSubscriber = Callable[[LeaderboardChangedEvent], Awaitable[None]]


class LeaderboardNotifier:
    def __init__(self) -> None:
        self._subscribers: dict[str, list[LeaderboardSubscriber]] = {}
        self._pending: set[asyncio.Task[int]] = set()

    def subscribe(self, topic: str, callback: LeaderboardSubscriber) -> Callable[[], None]:
        self._subscribers.setdefault(topic, []).append(callback)

        def _unsubscribe() -> None:
            callbacks = self._subscribers.get(topic, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return _unsubscribe

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))

    def pending_count(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        self._subscribers.clear()

    async def publish(self, event: LeaderboardChangedEvent) -> int:
        delivered = 0
        for callback in list(self._subscribers.get(event.topic, [])):
            try:
                await callback(event)
            except Exception:
                logger.exception(
                    "leaderboard_notification_failed",
                    topic=event.topic,
                    session_id=str(event.session_id),
                )
                continue
            delivered += 1
        return delivered

    async def publish_result_recorded(
        self,
        result: StoredResult,
        *,
        occurred_at: datetime | None = None,
    ) -> int:
        delivered = 0
        for topic in (result.game_type, LEADERBOARD_OVERALL):
            delivered += await self.publish(
                LeaderboardChangedEvent(
                    topic=topic,
                    game_type=result.game_type,
                    user_id=result.user_id,
                    session_id=result.session_id,
                    score=result.score,
                    occurred_at=occurred_at or result.completed_at,
                )
            )
        return delivered

    def schedule_result_recorded(self, result: StoredResult) -> asyncio.Task[int]:
        task = asyncio.create_task(
            self.publish_result_recorded(result),
            name=f"leaderboard-notify-{result.session_id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._on_publish_done)
        return task

    def _on_publish_done(self, task: asyncio.Task[int]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("leaderboard_notification_cancelled", task=task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "leaderboard_notification_task_failed",
                task=task.get_name(),
                error_type=type(exc).__name__,
            )

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


leaderboard_notifier = LeaderboardNotifier()
