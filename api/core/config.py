"""
Environment-driven settings.

Values are read once at startup into an immutable `Settings` object that is
attached to the app (`app.state.settings`) and passed down from there.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from fastapi import Request


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_optional_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_list(name: str) -> list[str]:
    raw = os.environ.get(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def _required(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise RuntimeError(f"{name} is not set.")
    return value


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    # None means issued tokens carry no `exp` claim.
    access_token_expire_minutes: int | None = None
    bcrypt_rounds: int = 10
    admin_username: str | None = None
    admin_password: str | None = None
    cors_origins: list[str] = field(default_factory=list)
    host: str = "0.0.0.0"
    port: int = 10000
    db_pool_min: int = 1
    db_pool_max: int = 5
    db_command_timeout_s: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=_required("DATABASE_URL"),
            jwt_secret=_required("JWT_SECRET"),
            jwt_algorithm=_env_str("JWT_ALG", "HS256"),
            access_token_expire_minutes=_env_optional_int("ACCESS_TOKEN_EXPIRE_MIN"),
            bcrypt_rounds=min(max(_env_int("BCRYPT_ROUNDS", 10), 4), 31),
            admin_username=_env_str("ADMIN_USERNAME") or None,
            admin_password=os.environ.get("ADMIN_PASSWORD") or None,
            cors_origins=_env_list("CORS_ORIGINS"),
            host=_env_str("HOST", "0.0.0.0"),
            port=_env_int("PORT", 10000),
            db_pool_min=_env_int("DB_POOL_MIN", 1),
            db_pool_max=_env_int("DB_POOL_MAX", 5),
            db_command_timeout_s=float(_env_int("DB_COMMAND_TIMEOUT_S", 30)),
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
