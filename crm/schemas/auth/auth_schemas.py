from pydantic import BaseModel, EmailStr
from typing import Literal


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int


class PrincipalOut(BaseModel):
    id: int
    username: str
    role: str
    full_name: str | None = None
    tenant_admin_id: int | None = None

    class Config:
        from_attributes = True


class LoginData(BaseModel):
    auth: TokenOut
    user: PrincipalOut
