"""
In-memory repositories and app wiring for API tests.

The fakes mirror the SQL repositories' method signatures and ordering rules
so the routers can run without PostgreSQL.
"""

from __future__ import annotations

import asyncio
import itertools
from datetime import datetime, timezone

import asyncpg
from fastapi import FastAPI
from fastapi.testclient import TestClient

from activity_logs.repository import get_log_repository
from auth.repository import get_user_repository, normalize_username
from core.config import Settings
from main import create_app
from quick_tasks.repository import get_task_repository

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "postgresql://user:pw@localhost:5432/test",
        "jwt_secret": TEST_SECRET,
        "bcrypt_rounds": 4,
        "admin_username": "admin",
        "admin_password": "admin-pw",
    }
    values.update(overrides)
    return Settings(**values)


class InMemoryStore:
    def __init__(self) -> None:
        self.users: dict[int, dict] = {}
        self.logs: list[dict] = []
        self.tasks: dict[int, dict] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)


class InMemoryUserRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create_user(self, *, username: str, password_hash: str, is_admin: bool = False) -> dict:
        username = normalize_username(username)
        if any(u["username"] == username for u in self.store.users.values()):
            raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")
        row = {
            "id": self.store.next_id(),
            "username": username,
            "password_hash": password_hash,
            "is_admin": is_admin,
            "created_at": datetime.now(timezone.utc),
        }
        self.store.users[row["id"]] = row
        return dict(row)

    async def create_user_if_absent(
        self, *, username: str, password_hash: str, is_admin: bool = False
    ) -> dict | None:
        if await self.get_user_by_username(username) is not None:
            return None
        return await self.create_user(username=username, password_hash=password_hash, is_admin=is_admin)

    async def get_user_by_username(self, username: str) -> dict | None:
        username = normalize_username(username)
        for row in self.store.users.values():
            if row["username"] == username:
                return dict(row)
        return None

    async def get_user_by_id(self, user_id: int) -> dict | None:
        row = self.store.users.get(user_id)
        return dict(row) if row is not None else None


class InMemoryLogRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def append_log(
        self,
        *,
        username: str,
        activity: str,
        device_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> dict:
        row = {
            "id": self.store.next_id(),
            "username": username,
            "device_id": device_id,
            "activity": activity,
            "timestamp": timestamp or datetime.now(timezone.utc),
        }
        self.store.logs.append(row)
        return dict(row)

    def _ordered(self, rows: list[dict], limit: int, offset: int) -> list[dict]:
        rows = sorted(rows, key=lambda r: (r["timestamp"], r["id"]), reverse=True)
        return [dict(r) for r in rows[offset : offset + limit]]

    async def list_logs(self, *, username: str, limit: int = 100, offset: int = 0) -> list[dict]:
        return self._ordered([r for r in self.store.logs if r["username"] == username], limit, offset)

    async def list_all_logs(self, *, limit: int = 100, offset: int = 0) -> list[dict]:
        return self._ordered(list(self.store.logs), limit, offset)

    async def list_device_logs(
        self,
        *,
        device_id: str,
        username: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict]:
        rows = [
            r
            for r in self.store.logs
            if r["device_id"] == device_id and (username is None or r["username"] == username)
        ]
        return self._ordered(rows, limit, offset)


class InMemoryTaskRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def add_task(self, *, username: str, task: str) -> dict:
        row = {
            "id": self.store.next_id(),
            "username": username,
            "task": task,
            "created_at": datetime.now(timezone.utc),
        }
        self.store.tasks[row["id"]] = row
        return dict(row)

    async def list_tasks(self, *, username: str, limit: int = 100, offset: int = 0) -> list[dict]:
        rows = sorted(
            (r for r in self.store.tasks.values() if r["username"] == username),
            key=lambda r: r["id"],
            reverse=True,
        )
        return [dict(r) for r in rows[offset : offset + limit]]

    async def get_task(self, task_id: int) -> dict | None:
        row = self.store.tasks.get(task_id)
        return dict(row) if row is not None else None

    async def delete_task(self, *, task_id: int, username: str) -> bool:
        row = self.store.tasks.get(task_id)
        if row is None or row["username"] != username:
            return False
        del self.store.tasks[task_id]
        return True


def build_app(settings: Settings | None = None) -> tuple[FastAPI, InMemoryStore]:
    app = create_app(settings or make_settings())
    store = InMemoryStore()
    app.dependency_overrides[get_user_repository] = lambda: InMemoryUserRepository(store)
    app.dependency_overrides[get_log_repository] = lambda: InMemoryLogRepository(store)
    app.dependency_overrides[get_task_repository] = lambda: InMemoryTaskRepository(store)
    return app, store


class ApiClient:
    """
    Thin helper around TestClient for the signup/login dance.
    """

    def __init__(self, app: FastAPI, **kwargs) -> None:
        self.client = TestClient(app, **kwargs)

    def signup(self, username: str, password: str):
        return self.client.post("/auth/signup", json={"username": username, "password": password})

    def login(self, username: str, password: str):
        return self.client.post("/auth/login", json={"username": username, "password": password})

    def token_for(self, username: str, password: str, *, create: bool = True) -> str:
        if create:
            self.signup(username, password)
        response = self.login(username, password)
        assert response.status_code == 200, response.text
        return response.json()["token"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


def seed_admin(store: InMemoryStore, settings: Settings) -> dict | None:
    from auth import service as auth_service

    return asyncio.run(auth_service.bootstrap_admin(users=InMemoryUserRepository(store), settings=settings))
