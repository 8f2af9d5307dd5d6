from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm.core.db import get_db
from crm.models.enums.user_role import UserRole
from crm.schemas.users.user_schemas import (
    UserCreateSchema,
    UserDetailSchema,
    UserListData,
)
from crm.services.users.user_services import create_user, list_users
from crm.utils.check_roles import require_role
from crm.utils.response import success_response, APIResponse
from crm.utils.logger import get_logger

router = APIRouter(prefix="/users", tags=["Users"])
logger = get_logger(__name__)


@router.post(
    "",
    response_model=APIResponse[UserDetailSchema],
    status_code=status.HTTP_201_CREATED,
)
async def create_user_api(
    payload: UserCreateSchema,
    db: AsyncSession = Depends(get_db),
    actor=Depends(require_role(["superadmin", "admin"])),
):
    logger.info("Create user request", extra={"email": payload.email})
    user = await create_user(db, payload, actor)
    return success_response("User created successfully", user)


@router.get("", response_model=APIResponse[UserListData])
async def list_users_api(
    role: UserRole | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    actor=Depends(require_role(["superadmin", "admin"])),
):
    users = await list_users(db, actor, role, page, page_size)
    return success_response("Users fetched", users)
