from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from crm.models.users.user_models import User
from crm.models.enums.user_role import UserRole
from crm.schemas.users.user_schemas import (
    UserCreateSchema,
    UserDetailSchema,
    UserListData,
)
from crm.core.security import hash_password
from crm.core.db import commit_or_raise, flush_or_raise
from crm.core.exceptions import ValidationError, AuthorizationError, AppException
from crm.constants.error_codes import ErrorCode
from crm.constants.activity_codes import ActivityCode
from crm.utils.activity_helpers import emit_activity
from crm.utils.logger import get_logger

logger = get_logger(__name__)

# the single role each caller role may create
CREATABLE_ROLE = {
    UserRole.superadmin: UserRole.admin,
    UserRole.admin: UserRole.user,
}


# =========================
# CREATE USER
# =========================
async def create_user(db: AsyncSession, payload: UserCreateSchema, actor: User) -> UserDetailSchema:
    creatable = CREATABLE_ROLE.get(UserRole(actor.role))
    if creatable is None:
        raise AuthorizationError("Not allowed to create accounts")

    role = payload.role or creatable
    if role != creatable:
        raise ValidationError(
            f"{actor.role.capitalize()} can only create {creatable.value} accounts",
            ErrorCode.USER_ROLE_INVALID,
        )

    exists = await db.scalar(select(User.id).where(User.username == payload.email))
    if exists:
        raise AppException(409, "User already exists", ErrorCode.USER_EMAIL_EXISTS)

    user = User(
        username=payload.email,
        password_hash=hash_password(payload.password),
        full_name=payload.full_name,
        role=role.value,
        # users are filed under the admin that created them
        created_by_admin_id=actor.id if role == UserRole.user else None,
    )

    db.add(user)
    await flush_or_raise(db)

    emit_activity(
        db,
        actor,
        ActivityCode.CREATE_USER,
        target_email=user.username,
        target_role=user.role.capitalize(),
    )

    await commit_or_raise(db)

    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return UserDetailSchema.model_validate(user)


# =========================
# LIST USERS
# =========================
async def list_users(
    db: AsyncSession,
    actor: User,
    role: UserRole | None = None,
    page: int = 1,
    page_size: int = 20,
) -> UserListData:
    stmt = select(User)

    if actor.role == UserRole.admin.value:
        stmt = stmt.where(User.created_by_admin_id == actor.id)

    if role:
        stmt = stmt.where(User.role == role.value)

    total = await db.scalar(
        select(func.count()).select_from(stmt.subquery())
    )

    result = await db.execute(
        stmt.order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return UserListData(
        total=total or 0,
        page=page,
        page_size=page_size,
        items=[UserDetailSchema.model_validate(u) for u in result.scalars().all()],
    )
