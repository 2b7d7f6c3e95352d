"""
Auth business logic.
"""

from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from core import errors
from core.config import Settings

from . import schemas, security
from .repository import UserRepository, normalize_username

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        is_admin=bool(user_row["is_admin"]),
    )


async def _hash(password: str, settings: Settings) -> str:
    # bcrypt is CPU-bound; keep it off the event loop.
    return await run_in_threadpool(security.hash_password, password, rounds=settings.bcrypt_rounds)


async def signup(
    payload: schemas.SignupRequest,
    *,
    users: UserRepository,
    settings: Settings,
) -> schemas.MessageResponse:
    username = normalize_username(payload.username)
    if not username:
        raise errors.BadRequest("Username and password are required")

    existing = await users.get_user_by_username(username)
    if existing is not None:
        raise errors.Conflict("Username already exists")

    password_hash = await _hash(payload.password, settings)
    # A concurrent signup can still win the race; the unique index then
    # raises and the error handlers map it to 409.
    user_row = await users.create_user(username=username, password_hash=password_hash)
    logger.info("signup user_id=%s username=%s", user_row["id"], username)
    return schemas.MessageResponse(message="User created successfully")


async def verify_credentials(username: str, password: str, *, users: UserRepository) -> dict | None:
    """
    Return the user row when the password matches, else None.

    Unknown usernames and wrong passwords are indistinguishable to callers.
    """
    user_row = await users.get_user_by_username(username)
    if user_row is None:
        return None
    is_valid = await run_in_threadpool(
        security.verify_password, password, str(user_row.get("password_hash") or "")
    )
    return user_row if is_valid else None


def issue_token(user_row: dict, settings: Settings) -> str:
    return security.build_access_token(
        user_id=int(user_row["id"]),
        username=str(user_row["username"]),
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


async def login(
    payload: schemas.LoginRequest,
    *,
    users: UserRepository,
    settings: Settings,
) -> schemas.LoginResponse:
    user_row = await verify_credentials(payload.username, payload.password, users=users)
    if user_row is None:
        logger.info("login_failed username=%s", normalize_username(payload.username))
        raise errors.Unauthorized(INVALID_CREDENTIALS)

    logger.info("login user_id=%s", user_row["id"])
    return schemas.LoginResponse(
        token=issue_token(user_row, settings),
        username=str(user_row["username"]),
        is_admin=bool(user_row["is_admin"]),
    )


async def get_user_from_access_token(
    access_token: str | None,
    *,
    users: UserRepository,
    settings: Settings,
) -> dict:
    try:
        payload = security.decode_access_token(
            access_token,
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
    except security.AuthSecurityError as exc:
        raise errors.Unauthorized(str(exc)) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise errors.Unauthorized("Invalid access token subject.")

    user_row = await users.get_user_by_id(int(subject))
    if user_row is None:
        raise errors.Unauthorized("User not found.")
    return user_row


def me(user_row: dict) -> schemas.UserResponse:
    return _to_user_response(user_row)


async def bootstrap_admin(*, users: UserRepository, settings: Settings) -> dict | None:
    """
    Seed the configured admin account on a fresh store.

    Does nothing when the account already exists or no admin credentials are
    configured.
    """
    username = normalize_username(settings.admin_username or "")
    if not username or not settings.admin_password:
        logger.warning("admin_bootstrap_skipped reason=not_configured")
        return None

    password_hash = await _hash(settings.admin_password, settings)
    row = await users.create_user_if_absent(
        username=username,
        password_hash=password_hash,
        is_admin=True,
    )
    if row is None:
        logger.info("admin_bootstrap_skipped reason=exists username=%s", username)
        return None

    logger.info("admin_bootstrapped user_id=%s username=%s", row["id"], username)
    return row
