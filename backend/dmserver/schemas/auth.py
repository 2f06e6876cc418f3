from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class Credentials(BaseModel):
    """Sign-up request. Validated once here, before anything is hashed."""
    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1, max_length=64)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username cannot be blank")
        return v


class SignInIn(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: str
    username: str
    email: str


class StatusOut(BaseModel):
    status: str = "ok"
