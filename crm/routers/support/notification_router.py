from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from crm.core.db import get_db
from crm.utils.get_user import get_current_user
from crm.utils.response import success_response, APIResponse
from crm.schemas.support.notification_schemas import (
    NotificationOut,
    NotificationListData,
    MarkAllReadData,
)
from crm.services.support.notification_service import (
    list_notifications,
    mark_notification_read,
    mark_all_notifications_read,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=APIResponse[NotificationListData])
async def list_notifications_api(
    unread_only: bool = Query(False),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    data = await list_notifications(db, user, unread_only, page, page_size)
    return success_response("Notifications fetched", data)


@router.patch("/{notification_id}/read", response_model=APIResponse[NotificationOut])
async def mark_notification_read_api(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    notification = await mark_notification_read(db, notification_id, user)
    return success_response("Notification marked as read", notification)


@router.post("/read-all", response_model=APIResponse[MarkAllReadData])
async def mark_all_notifications_read_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    updated = await mark_all_notifications_read(db, user)
    return success_response("All notifications marked as read", MarkAllReadData(updated=updated))
