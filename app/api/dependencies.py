"""
Shared API dependencies.

Reusable FastAPI dependencies for caller identity and database access.
"""

from typing import Optional

from fastapi import Header, HTTPException, status


def get_current_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id"), ) -> str:
    """Return the caller's user id, set by the authenticating gateway."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Id header", )
    return x_user_id.strip()
