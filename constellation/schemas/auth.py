from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from constellation.schemas.common import ApiModel, NonEmptyStr


class RegisterRequest(ApiModel):
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=6, description="at least 6 characters")
    avatar: Optional[str] = None


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
