"""Caller identity handed over by the upstream gateway.

The gateway authenticates the learner and forwards an opaque user id plus a
role. Requests are trusted only when they also carry the shared gateway token.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from fastapi import Request

USER_ID_HEADER = "X-User-Id"
USER_ROLE_HEADER = "X-User-Role"
INTERNAL_TOKEN_HEADER = "X-Internal-Token"

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)
MAX_USER_ID_LENGTH = 64


@dataclass(frozen=True, slots=True)
class CallerIdentity:
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def is_valid_internal_token(*, expected_token: str, received_token: str | None) -> bool:
    if not expected_token or not received_token:
        return False
    return secrets.compare_digest(expected_token, received_token)


def is_gateway_request_authenticated(request: Request, *, expected_token: str) -> bool:
    return is_valid_internal_token(
        expected_token=expected_token,
        received_token=request.headers.get(INTERNAL_TOKEN_HEADER),
    )


def parse_caller_identity(request: Request) -> CallerIdentity | None:
    user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
    if not user_id or len(user_id) > MAX_USER_ID_LENGTH:
        return None

    role = (request.headers.get(USER_ROLE_HEADER) or ROLE_USER).strip().lower()
    if role not in ROLES:
        return None
    return CallerIdentity(user_id=user_id, role=role)
