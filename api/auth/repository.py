"""
Credential persistence (raw SQL).
"""

from __future__ import annotations

from fastapi import Depends

from core import db

_USER_COLUMNS = "id, username, password_hash, is_admin, created_at"


def normalize_username(username: str) -> str:
    return (username or "").strip()


class UserRepository:
    def __init__(self, database: db.Database) -> None:
        self._db = database

    async def create_user(self, *, username: str, password_hash: str, is_admin: bool = False) -> dict:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO users (username, password_hash, is_admin)
            VALUES ($1, $2, $3)
            RETURNING {_USER_COLUMNS}
            """,
            normalize_username(username),
            password_hash,
            is_admin,
        )
        if row is None:
            raise RuntimeError("Failed to create user.")
        return row

    async def create_user_if_absent(
        self, *, username: str, password_hash: str, is_admin: bool = False
    ) -> dict | None:
        """
        Insert the user unless the username is taken. Returns None when it was.
        """
        return await self._db.fetch_one(
            f"""
            INSERT INTO users (username, password_hash, is_admin)
            VALUES ($1, $2, $3)
            ON CONFLICT (username) DO NOTHING
            RETURNING {_USER_COLUMNS}
            """,
            normalize_username(username),
            password_hash,
            is_admin,
        )

    async def get_user_by_username(self, username: str) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE username = $1
            """,
            normalize_username(username),
        )

    async def get_user_by_id(self, user_id: int) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE id = $1
            """,
            user_id,
        )


def get_user_repository(database: db.Database = Depends(db.get_database)) -> UserRepository:
    return UserRepository(database)
