"""Account-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    handle: str = Field(..., description="Unique login handle")
    password: str = Field(..., description="Shared-secret password")
    display_name: str | None = Field(None, description="Nickname shown on the board")
    avatar: str | None = Field(None, description="Avatar URL or data URI")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    handle: str = Field(..., description="Login handle")
    password: str = Field(..., description="Shared-secret password")


class ProfileUpdateRequest(BaseModel):
    """Schema for updating one's own profile; unset fields are left alone."""

    handle: str | None = Field(None, description="Account to edit; defaults to the caller")
    display_name: str | None = Field(None, max_length=20)
    avatar: str | None = None
    gender: str | None = Field(None, max_length=16)
    looking_for: str | None = Field(None, max_length=200)
    contact_qq: str | None = Field(None, max_length=32)
    contact_wx: str | None = Field(None, max_length=64)


class DeleteUserRequest(BaseModel):
    """Schema for privileged account removal."""

    handle: str = Field(..., description="Account to remove")


class AccountResponse(BaseModel):
    """Account details returned to its owner; never includes the digest."""

    handle: str
    display_name: str
    avatar: str | None
    is_privileged: bool
    gender: str | None
    looking_for: str | None
    contact_qq: str | None
    contact_wx: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    """Public profile of any account."""

    handle: str
    display_name: str
    avatar: str | None
    gender: str | None
    looking_for: str | None
    contact_qq: str | None
    contact_wx: str | None

    model_config = ConfigDict(from_attributes=True)
