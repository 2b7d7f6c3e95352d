"""
Auth security helpers: password hashing and access tokens.
"""

from __future__ import annotations

import base64
import hashlib
import time
from typing import Any

import bcrypt
import jwt

ACCESS_TOKEN_TYPE = "access"


class AuthSecurityError(RuntimeError):
    pass


class TokenMissing(AuthSecurityError):
    pass


class TokenInvalid(AuthSecurityError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def _prehash(plain_password: str) -> bytes:
    # bcrypt only accepts 72 bytes; a base64 SHA-256 digest is 44 and has no NUL bytes.
    password = (plain_password or "").encode("utf-8")
    if not password:
        return b""
    return base64.b64encode(hashlib.sha256(password).digest())


def hash_password(plain_password: str, *, rounds: int = 10) -> str:
    password = _prehash(plain_password)
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = _prehash(plain_password)
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(
    *,
    user_id: int,
    username: str,
    secret: str,
    algorithm: str = "HS256",
    expire_minutes: int | None = None,
) -> str:
    issued_at = now_epoch_s()
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
    }
    # TODO: pair a default expiry with a refresh-token endpoint so clients can renew.
    if expire_minutes is not None:
        payload["exp"] = issued_at + (expire_minutes * 60)
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str | None, *, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise TokenMissing("Access token is missing.")

    try:
        payload = jwt.decode(raw, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise TokenInvalid("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenInvalid("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != ACCESS_TOKEN_TYPE:
        raise TokenInvalid("Token is not an access token.")

    return payload
