from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Enum, Index
from crm.core.db import Base
from crm.models.base.mixins import TimestampMixin
from crm.models.enums.notification_type import NotificationType


class Notification(Base, TimestampMixin):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quotation_id = Column(Integer, ForeignKey("quotations.id", ondelete="CASCADE"), nullable=True)
    title = Column(String(150), nullable=False, default="Notification")
    message = Column(String, nullable=False)
    type = Column(Enum(NotificationType), nullable=False, default=NotificationType.info)
    is_read = Column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_notification_user_read", "user_id", "is_read"),)

    def __repr__(self):
        return f"<Notification id={self.id} user_id={self.user_id} read={self.is_read}>"
