# pm_console/auth.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException


@dataclass(frozen=True)
class ConsoleSession:
    """
    The authenticated context a screen needs before it may fetch. The token
    is opaque here: it is only forwarded to the records service.
    """

    token: str


def get_session(authorization: Optional[str] = Header(default=None)) -> Optional[ConsoleSession]:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return ConsoleSession(token=value.strip())


def require_session(s: Optional[ConsoleSession] = Depends(get_session)) -> ConsoleSession:
    if s is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return s
