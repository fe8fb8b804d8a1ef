from __future__ import annotations

from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def add_user(username: str, password: str, role: str = "user") -> None:
    _users[username] = {"password_hash": _hash_password(password), "role": role}


def _seed_users() -> None:
    """Demo accounts: two explorers and one curator who may tag places."""
    add_user("explorer", "explorer123")
    add_user("wanderer", "wanderer123")
    add_user("curator", "curator123", role="admin")


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {"username": username, "role": record["role"]}
    return None


_seed_users()
