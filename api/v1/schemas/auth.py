from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from .user import UserOut


class SignupIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class AuthOut(BaseModel):
    user: UserOut
    token: str
    message: str
