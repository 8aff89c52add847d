from pydantic import BaseModel, EmailStr, Field, field_validator
from models.userModels import UserRole
from schemas.schemas import CamelModel
from .returnLoginSchema import ReturnUser
import re

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


class CreateUserRequest(BaseModel):
    """Schema for user registration request"""
    username: str = Field(..., min_length=3, max_length=50,
                          description="Letters, numbers and underscores")
    email: EmailStr = Field(..., description="User's email address")
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72,
                          description="User's password")
    role: UserRole = Field(UserRole.VIEWER, description="creator or viewer")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if not (re.search(r"[a-z]", v) and re.search(r"[A-Z]", v) and re.search(r"\d", v)):
            raise ValueError(
                "Password must contain at least one uppercase letter, one lowercase letter, and one number"
            )
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "username": "jane_films",
                "email": "jane@videostream.io",
                "password": "SecurePass123",
                "role": "creator"
            }
        }


class LoginUser(BaseModel):
    # username or email
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v


class AuthResponse(CamelModel):
    message: str
    token: str
    user: ReturnUser


class SessionUser(BaseModel):
    """Identity attached to an authenticated request, re-read from the users table."""
    id: int
    username: str
    email: str
    role: UserRole
    is_active: bool

    class Config:
        from_attributes = True

    @property
    def is_creator(self) -> bool:
        return self.role == UserRole.CREATOR
