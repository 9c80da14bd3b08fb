from pydantic import BaseModel, EmailStr, field_validator
from app.models.user import UserRole
from app.schemas.base import CamelModel, UtcDatetime
import re

NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")

def _lower_email(value):
    if isinstance(value, str):
        value = value.strip().lower()
        if not value:
            raise ValueError("Email is required.")
    return value

class SignUpRequest(BaseModel):
    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required.")
        if not NAME_PATTERN.match(value):
            raise ValueError("Name can only contain letters.")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _lower_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required.")
        if not 8 <= len(value) <= 20:
            raise ValueError("Password must be 8 - 20 characters long.")
        return value

class SignInRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _lower_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required.")
        return value

class SessionTokenResponse(CamelModel):
    session_token: str

class UserProfile(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    created_at: UtcDatetime
    updated_at: UtcDatetime
