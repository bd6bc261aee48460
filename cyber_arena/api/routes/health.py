"""Liveness and readiness checks.

`/health` reports the database and redis. `/ready` additionally requires every
game type to have at least one active training item.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from sqlalchemy import text

from cyber_arena.core.config import get_settings
from cyber_arena.db.repo.training_items_repo import TrainingItemsRepo
from cyber_arena.db.session import SessionLocal
from cyber_arena.game.items.catalog import GAME_TYPES

router = APIRouter(tags=["health"])
logger = structlog.get_logger(__name__)

CHECK_TIMEOUT_SECONDS = 2.0


def _ok_check(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "ok"}
    if extra:
        payload.update(extra)
    return payload


def _failed_check(error: str, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "failed", "error": error}
    if extra:
        payload.update(extra)
    return payload


async def _timed_check(
    dependency: str,
    check: Callable[[], Awaitable[dict[str, Any]]],
) -> dict[str, Any]:
    started = time.monotonic()
    try:
        return await asyncio.wait_for(check(), timeout=CHECK_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning("health_check_timed_out", dependency=dependency)
        return _failed_check(f"{dependency}_timeout")
    except Exception:
        logger.warning("health_check_failed", dependency=dependency, exc_info=True)
        return _failed_check(f"{dependency}_unavailable")
    finally:
        logger.debug(
            "health_check_finished",
            dependency=dependency,
            duration_ms=int((time.monotonic() - started) * 1000),
        )


async def _ping_database() -> dict[str, Any]:
    async with SessionLocal() as session:
        await session.execute(text("SELECT 1"))
    return _ok_check()


async def _ping_redis() -> dict[str, Any]:
    redis_client = Redis.from_url(get_settings().redis_url)
    try:
        if await redis_client.ping() is not True:
            return _failed_check("redis_unexpected_ping_response")
        return _ok_check()
    finally:
        await redis_client.aclose()


async def _count_training_content() -> dict[str, Any]:
    async with SessionLocal() as session:
        counts = await TrainingItemsRepo.count_active_by_kind(session)
    active_items = {kind: int(counts.get(kind, 0)) for kind in GAME_TYPES}
    empty_kinds = [kind for kind, total in active_items.items() if total == 0]
    if empty_kinds:
        return _failed_check(
            "training_content_missing",
            {"active_items": active_items, "empty_game_types": empty_kinds},
        )
    return _ok_check({"active_items": active_items})


async def _check_database() -> dict[str, Any]:
    return await _timed_check("database", _ping_database)


async def _check_redis() -> dict[str, Any]:
    return await _timed_check("redis", _ping_redis)


async def _check_training_content() -> dict[str, Any]:
    return await _timed_check("training_content", _count_training_content)


async def _collect_dependency_checks() -> dict[str, dict[str, Any]]:
    database, redis = await asyncio.gather(_check_database(), _check_redis())
    return {"database": database, "redis": redis}


def _all_checks_ok(checks: dict[str, dict[str, Any]]) -> bool:
    return all(check.get("status") == "ok" for check in checks.values())


def _checks_response(
    checks: dict[str, dict[str, Any]],
    *,
    ok_status: str,
    failed_status: str,
) -> JSONResponse:
    passed = _all_checks_ok(checks)
    return JSONResponse(
        status_code=status.HTTP_200_OK if passed else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": ok_status if passed else failed_status, "checks": checks},
    )


@router.get("/health")
async def health() -> JSONResponse:
    checks = await _collect_dependency_checks()
    return _checks_response(checks, ok_status="ok", failed_status="degraded")


@router.get("/ready")
async def ready() -> JSONResponse:
    checks = await _collect_dependency_checks()
    if checks["database"]["status"] == "ok":
        checks["training_content"] = await _check_training_content()
    else:
        checks["training_content"] = _failed_check("database_unavailable")
    return _checks_response(checks, ok_status="ready", failed_status="not_ready")


@router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "live"}
