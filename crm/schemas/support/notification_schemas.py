from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from crm.models.enums.notification_type import NotificationType


class NotificationOut(BaseModel):
    id: int
    quotation_id: Optional[int]
    title: str
    message: str
    type: NotificationType
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationListData(BaseModel):
    total: int
    unread: int
    items: List[NotificationOut]


class MarkAllReadData(BaseModel):
    updated: int
