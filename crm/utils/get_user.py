from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from crm.core.db import get_db
from crm.core.security import decode_access_token
from crm.core.exceptions import AuthenticationError
from crm.constants.error_codes import ErrorCode
from crm.models.users.user_models import User
from crm.utils.logger import get_logger

logger = get_logger("auth.guard")


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not authorization or not authorization.startswith("Bearer "):
        logger.warning("Missing bearer token")
        raise AuthenticationError("Invalid authorization header")

    token = authorization[len("Bearer "):].strip()
    payload = decode_access_token(token)

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token subject", ErrorCode.TOKEN_INVALID)

    user = await db.get(User, user_id)

    if not user:
        logger.warning("Token user not found", extra={"user_id": user_id})
        raise AuthenticationError("User not found")

    if not user.is_active:
        logger.warning("Inactive user access blocked", extra={"user_id": user.id})
        raise AuthenticationError("User account is inactive", ErrorCode.USER_INACTIVE)

    if user.token_version != payload.get("token_version"):
        logger.warning("Token version mismatch", extra={"user_id": user.id})
        raise AuthenticationError("Session expired", ErrorCode.SESSION_EXPIRED)

    request.state.user = user
    return user
