from __future__ import annotations

from fastapi import Depends, HTTPException, Request


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(user: dict = Depends(require_user)) -> dict:
    """Raise 403 unless the logged-in user may curate place tags."""
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def current_user_id(user: dict = Depends(require_user)) -> str:
    """Preferences are keyed by the session username."""
    return user["username"]
