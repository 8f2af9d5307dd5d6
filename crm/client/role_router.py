"""
Pick which dashboard a front end should mount for a stored token.

The token is decoded WITHOUT signature verification, so the result is only
a presentation hint. The server re-checks every request.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from jose import jwt, JWTError


class Dashboard(str, Enum):
    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    USER = "user"
    LOGIN = "login"


ROLE_DASHBOARDS = {
    "superadmin": Dashboard.SUPERADMIN,
    "admin": Dashboard.ADMIN,
    "user": Dashboard.USER,
}


def read_role_claim(token: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
    if not token:
        return None

    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None

    exp = claims.get("exp")
    if exp is not None:
        now = now or datetime.now(timezone.utc)
        try:
            if float(exp) <= now.timestamp():
                return None
        except (TypeError, ValueError):
            return None

    role = claims.get("role")
    return role if isinstance(role, str) else None


def resolve_dashboard(token: Optional[str], now: Optional[datetime] = None) -> Dashboard:
    return ROLE_DASHBOARDS.get(read_role_claim(token, now), Dashboard.LOGIN)
