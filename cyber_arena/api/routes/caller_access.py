from __future__ import annotations

import structlog
from fastapi import HTTPException, Request

from cyber_arena.core.config import get_settings
from cyber_arena.services.caller_identity import (
    CallerIdentity,
    is_gateway_request_authenticated,
    parse_caller_identity,
)

logger = structlog.get_logger(__name__)


def _require_caller(request: Request, *, admin: bool = False) -> CallerIdentity:
    settings = get_settings()
    if not is_gateway_request_authenticated(request, expected_token=settings.internal_api_token):
        logger.warning(
            "training_api_auth_failed",
            reason="invalid_gateway_token",
            path=request.url.path,
        )
        raise HTTPException(status_code=401, detail={"code": "E_UNAUTHENTICATED"})

    caller = parse_caller_identity(request)
    if caller is None:
        logger.warning(
            "training_api_auth_failed",
            reason="missing_identity",
            path=request.url.path,
        )
        raise HTTPException(status_code=401, detail={"code": "E_UNAUTHENTICATED"})

    if admin and not caller.is_admin:
        logger.warning(
            "training_api_auth_failed",
            reason="admin_required",
            path=request.url.path,
            user_id=caller.user_id,
        )
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})
    return caller
