from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crm.core.db import get_db
from crm.schemas.support.activity_schemas import UserActivityFilters, UserActivityListData
from crm.services.support.activity_service import list_user_activities
from crm.utils.check_roles import require_role
from crm.utils.response import success_response, APIResponse
from crm.utils.logger import get_logger

router = APIRouter(prefix="/activities", tags=["User Activities"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[UserActivityListData])
async def list_user_activities_api(
    filters: UserActivityFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    superadmin=Depends(require_role(["superadmin"])),
):
    logger.info(
        "List user activities requested",
        extra=filters.model_dump(exclude_none=True),
    )

    result = await list_user_activities(db=db, filters=filters)

    return success_response(
        "User activities fetched successfully",
        result,
    )
