"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Header

from core import errors
from core.config import Settings, get_settings

from . import policy, service
from .repository import UserRepository, get_user_repository


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise errors.Unauthorized("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise errors.Unauthorized("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise errors.Unauthorized("Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(
    access_token: str = Depends(get_bearer_token),
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    return await service.get_user_from_access_token(access_token, users=users, settings=settings)


async def get_admin_user(current_user: dict = Depends(get_current_user)) -> dict:
    policy.ensure_admin(current_user)
    return current_user
