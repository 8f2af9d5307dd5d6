from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime

from crm.models.enums.user_role import UserRole


# =========================
# CREATE
# =========================
class UserCreateSchema(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None
    # defaults to the role the caller is allowed to create
    role: Optional[UserRole] = None


# =========================
# RESPONSE SCHEMAS
# =========================
class UserDetailSchema(BaseModel):
    id: int
    username: EmailStr
    role: str
    full_name: Optional[str]
    is_active: bool
    last_login: Optional[datetime]
    created_by_admin_id: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserListData(BaseModel):
    total: int
    page: int
    page_size: int
    items: List[UserDetailSchema]
