"""
Per-route authorization rules, evaluated after authentication.

Admins may read any user's logs, but quick tasks stay owner-only even for
admins.
"""

from __future__ import annotations

from core import errors


def is_admin(user: dict) -> bool:
    return bool(user.get("is_admin", False))


def is_owner(user: dict, owner: str) -> bool:
    return str(user.get("username") or "") == (owner or "")


def ensure_admin(user: dict) -> None:
    if not is_admin(user):
        raise errors.Forbidden("Admin access required")


def ensure_can_read_user_logs(user: dict, owner: str) -> None:
    if is_owner(user, owner) or is_admin(user):
        return None
    raise errors.Forbidden("Access denied")


def ensure_task_owner(user: dict, task: dict) -> None:
    if not is_owner(user, str(task.get("username") or "")):
        raise errors.Forbidden("Not allowed to modify this task")
