"""
backend/auth.py
---------------
Authentication collaborator.

Sessions are issued elsewhere; the gateway in front of this service forwards
the authenticated user id in the `X-User-Id` header. Absence means anonymous.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header

USER_HEADER = "X-User-Id"


async def current_user_id(x_user_id: Optional[str] = Header(default=None, alias=USER_HEADER)) -> Optional[str]:
    """Return the caller's user id, or None for anonymous requests."""
    if x_user_id is None:
        return None
    x_user_id = x_user_id.strip()
    return x_user_id or None
