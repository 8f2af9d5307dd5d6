from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from crm.core.db import Base
from crm.models.base.mixins import TimestampMixin, UTCDateTime
from crm.models.enums.user_role import UserRole


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(50), nullable=False, default=UserRole.user.value)
    full_name = Column(String(150), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    token_version = Column(Integer, nullable=False, default=0)
    last_login = Column(UTCDateTime)

    created_by_admin_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_by_admin = relationship("User", remote_side=[id], lazy="selectin")

    @property
    def tenant_admin_id(self) -> int | None:
        """The admin account this user's records are filed under."""
        if self.role == UserRole.admin.value:
            return self.id
        if self.role == UserRole.user.value:
            return self.created_by_admin_id
        return None

    def __repr__(self):
        return f"<User id={self.id} username={self.username} role={self.role} created_by_admin_id={self.created_by_admin_id}>"
