"""Pydantic schemas for admin authentication."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, EmailStr, Field

from restaurant_api.schemas.base import BaseResponse


class LoginRequest(BaseModel):
    username: Annotated[str, Field(min_length=1, max_length=100)]
    password: str


class TokenResponse(BaseModel):
    """Bearer token returned on login."""

    admin_id: int
    username: str
    access_token: str
    token_type: str = "bearer"


class AdminCreate(BaseModel):
    username: Annotated[str, Field(min_length=1, max_length=100)]
    password: Annotated[str, Field(min_length=8, max_length=128)]
    email: EmailStr | None = None


class AdminResponse(BaseResponse):
    id: int
    username: str
    email: str | None
    created_at: datetime


class AdminUpdate(BaseModel):
    """Partial edit; only the fields sent are changed."""

    username: Annotated[str, Field(min_length=1, max_length=100)] | None = None
    password: Annotated[str, Field(min_length=8, max_length=128)] | None = None
    email: EmailStr | None = None
