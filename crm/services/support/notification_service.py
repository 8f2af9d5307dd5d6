from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update, desc

from crm.models.support.notification_models import Notification
from crm.models.quotations.quotation_models import Quotation
from crm.models.base.mixins import utcnow
from crm.schemas.support.notification_schemas import (
    NotificationOut,
    NotificationListData,
)
from crm.constants.notification_templates import (
    QUOTATION_STATUS_MESSAGES,
    DEFAULT_STATUS_MESSAGE,
)
from crm.constants.error_codes import ErrorCode
from crm.core.db import commit_or_raise
from crm.core.exceptions import NotFoundError
from crm.utils.logger import get_logger

logger = get_logger(__name__)


def notify_quotation_status(db: AsyncSession, quotation: Quotation) -> Notification:
    """Stage a notification telling the quotation's owner about its new status."""
    template, notification_type = QUOTATION_STATUS_MESSAGES.get(
        quotation.status, DEFAULT_STATUS_MESSAGE
    )

    notification = Notification(
        user_id=quotation.owner_id,
        quotation_id=quotation.id,
        title=f"Quotation {quotation.status.value.capitalize()}",
        message=template.format(
            service=quotation.service,
            status=quotation.status.value,
            final_price=quotation.final_price,
            rejection_reason=quotation.rejection_reason,
        ),
        type=notification_type,
        is_read=False,
    )
    db.add(notification)

    logger.info(
        "Quotation status notification staged",
        extra={"quotation_id": quotation.id, "user_id": quotation.owner_id},
    )
    return notification


async def list_notifications(
    db: AsyncSession,
    user,
    unread_only: bool = False,
    page: int = 1,
    page_size: int = 20,
) -> NotificationListData:
    conditions = [Notification.user_id == user.id]
    if unread_only:
        conditions.append(Notification.is_read.is_(False))

    total = await db.scalar(
        select(func.count(Notification.id)).where(*conditions)
    )
    unread = await db.scalar(
        select(func.count(Notification.id)).where(
            Notification.user_id == user.id,
            Notification.is_read.is_(False),
        )
    )

    result = await db.execute(
        select(Notification)
        .where(*conditions)
        .order_by(desc(Notification.created_at), desc(Notification.id))
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return NotificationListData(
        total=total or 0,
        unread=unread or 0,
        items=[NotificationOut.model_validate(n) for n in result.scalars().all()],
    )


async def mark_notification_read(
    db: AsyncSession,
    notification_id: int,
    user,
) -> NotificationOut:
    notification = await db.scalar(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user.id,
        )
    )
    # another user's notification is reported as missing
    if not notification:
        raise NotFoundError("Notification not found", ErrorCode.NOTIFICATION_NOT_FOUND)

    if not notification.is_read:
        notification.is_read = True
        notification.touch()
        await commit_or_raise(db)

    return NotificationOut.model_validate(notification)


async def mark_all_notifications_read(db: AsyncSession, user) -> int:
    result = await db.execute(
        update(Notification)
        .where(
            Notification.user_id == user.id,
            Notification.is_read.is_(False),
        )
        .values(is_read=True, updated_at=utcnow())
        .execution_options(synchronize_session="fetch")
    )
    await commit_or_raise(db)

    logger.info(
        "Notifications marked read",
        extra={"user_id": user.id, "count": result.rowcount},
    )
    return result.rowcount
