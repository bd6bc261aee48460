"""Redis pub/sub backend for leaderboard change notifications."""

from __future__ import annotations

import json
from collections.abc import Callable

import structlog
from redis.asyncio import Redis

from cyber_arena.game.items.catalog import GAME_TYPES, LEADERBOARD_OVERALL
from cyber_arena.game.leaderboard.notifier import LeaderboardNotifier
from cyber_arena.game.leaderboard.types import LeaderboardChangedEvent

logger = structlog.get_logger(__name__)

LEADERBOARD_TOPICS: tuple[str, ...] = (*GAME_TYPES, LEADERBOARD_OVERALL)


def channel_for_topic(prefix: str, topic: str) -> str:
    return f"{prefix.rstrip(':')}:{topic}"


class RedisLeaderboardBroadcaster:
    def __init__(self, redis_client: Redis, *, channel_prefix: str) -> None:
        self._redis = redis_client
        self._channel_prefix = channel_prefix
        self._unsubscribers: list[Callable[[], None]] = []

    async def forward(self, event: LeaderboardChangedEvent) -> None:
        channel = channel_for_topic(self._channel_prefix, event.topic)
        message = json.dumps(
            event.to_payload(),
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )
        receivers = await self._redis.publish(channel, message)
        logger.debug(
            "leaderboard_change_broadcast",
            channel=channel,
            receivers=receivers,
            session_id=str(event.session_id),
        )

    def attach(self, notifier: LeaderboardNotifier) -> None:
        for topic in LEADERBOARD_TOPICS:
            self._unsubscribers.append(notifier.subscribe(topic, self.forward))

    async def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        await self._redis.aclose()


def build_redis_broadcaster(
    *,
    redis_url: str,
    channel_prefix: str,
    socket_timeout_seconds: float,
) -> RedisLeaderboardBroadcaster:
    return RedisLeaderboardBroadcaster(
        Redis.from_url(
            redis_url,
            socket_timeout=socket_timeout_seconds,
            socket_connect_timeout=socket_timeout_seconds,
        ),
        channel_prefix=channel_prefix,
    )
