from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .profile import ProfileOut


class UserOut(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(BaseModel):
    user: UserOut
    message: str


class UserProfileEnvelope(UserEnvelope):
    profile: ProfileOut | None = None


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str


class UserList(BaseModel):
    users: list[UserOut]
