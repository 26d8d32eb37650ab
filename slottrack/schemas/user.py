from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

Role = Literal["admin", "manager", "teknisi", "frontdesk"]


class UserBase(BaseModel):
    username: str = Field(..., min_length=2, max_length=64)
    full_name: str | None = Field(None, max_length=255)
    role: Role = "frontdesk"
    is_active: bool = True


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)


class UserUpdate(BaseModel):
    full_name: str | None = Field(None, max_length=255)
    role: Role | None = None
    is_active: bool | None = None
    password: str | None = Field(None, min_length=8)

    model_config = {"extra": "forbid"}


class ProfileUpdate(BaseModel):
    full_name: str | None = Field(None, max_length=255)
    password: str | None = Field(None, min_length=8)

    model_config = {"extra": "forbid"}


class UserResponse(UserBase):
    id: int
    full_name: str
    last_login_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: str
    password: str
