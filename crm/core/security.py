# crm/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext
from jose import jwt, JWTError

from crm.core.config import (
    JWT_ACCESS_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)
from crm.core.exceptions import AuthenticationError
from crm.constants.error_codes import ErrorCode

ACCESS_TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ("sub", "role", "token_version", "exp")

# =====================================================
# PASSWORD HASHING
# =====================================================
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


# =====================================================
# ACCESS TOKEN
# =====================================================
def create_access_token(
    subject: str,
    role: str,
    token_version: int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a bearer token.

    ``role`` is only a hint for front ends choosing a dashboard; the API
    always reloads the user and trusts the stored role. ``token_version``
    must match the user's current version or the token is refused.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "sub": subject,
        "role": role,
        "token_version": token_version,
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, JWT_ACCESS_SECRET_KEY, algorithm=JWT_ALGORITHM)


def issue_access_token(user) -> tuple[str, int]:
    """Token for a persisted user, plus its lifetime in seconds."""
    token = create_access_token(
        subject=str(user.id),
        role=user.role,
        token_version=user.token_version,
    )
    return token, ACCESS_TOKEN_EXPIRE_MINUTES * 60


def decode_access_token(token: str) -> dict:
    try:
        claims = jwt.decode(token, JWT_ACCESS_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token", ErrorCode.TOKEN_INVALID)

    if claims.get("type") != ACCESS_TOKEN_TYPE:
        raise AuthenticationError("Invalid token type", ErrorCode.TOKEN_INVALID)

    missing = [name for name in REQUIRED_CLAIMS if claims.get(name) is None]
    if missing:
        raise AuthenticationError(
            f"Token is missing claims: {', '.join(missing)}",
            ErrorCode.TOKEN_INVALID,
        )

    return claims
