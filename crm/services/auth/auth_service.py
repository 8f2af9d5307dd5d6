from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.users.user_models import User
from crm.schemas.auth.auth_schemas import LoginData, TokenOut, PrincipalOut
from crm.core.security import verify_password, issue_access_token
from crm.core.db import commit_or_raise
from crm.core.exceptions import AuthenticationError
from crm.constants.error_codes import ErrorCode
from crm.constants.activity_codes import ActivityCode
from crm.utils.activity_helpers import emit_activity
from crm.utils.logger import get_logger

logger = get_logger("auth.service")


# =====================================================
# LOGIN
# =====================================================
async def login_user(db: AsyncSession, email: str, password: str) -> LoginData:
    logger.info("Authenticating user", extra={"email": email})

    result = await db.execute(
        select(User).where(User.username == email)
    )
    user = result.scalars().first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials", extra={"email": email})
        raise AuthenticationError("Invalid credentials", ErrorCode.INVALID_CREDENTIALS)

    if not user.is_active:
        logger.warning("Inactive user login blocked", extra={"email": email})
        raise AuthenticationError("User account is inactive", ErrorCode.USER_INACTIVE)

    user.last_login = datetime.now(timezone.utc)

    access_token, expires_in = issue_access_token(user)

    emit_activity(db, user, ActivityCode.LOGIN)

    await commit_or_raise(db)

    logger.info("Login successful", extra={"user_id": user.id})

    return LoginData(
        auth=TokenOut(
            access_token=access_token,
            expires_in=expires_in,
        ),
        user=PrincipalOut.model_validate(user),
    )


# =====================================================
# LOGOUT
# =====================================================
async def logout_user(db: AsyncSession, user: User) -> None:
    logger.info("Logging out user", extra={"user_id": user.id})

    # every token issued so far carries the old version
    user.token_version += 1

    emit_activity(db, user, ActivityCode.LOGOUT)

    await commit_or_raise(db)

    logger.info("Logout successful", extra={"user_id": user.id})
