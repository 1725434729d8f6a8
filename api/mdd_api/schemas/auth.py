from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Tuple
from datetime import datetime


class Principal(BaseModel):
    """Authenticated identity handed to the login flow.

    Carries no role information: the application has no role model, so
    ``authorities`` is always empty.
    """
    model_config = ConfigDict(frozen=True)

    identifier: str
    password_hash: str = Field(..., repr=False)
    authorities: Tuple[str, ...] = ()


class LoginRequest(BaseModel):
    """Login request schema."""
    identifier: str = Field(..., description="Email or username, depending on LOGIN_IDENTIFIER")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(BaseModel):
    """Registration request schema."""
    username: str = Field(..., min_length=3, max_length=50, description="Username")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, description="Password (minimum 6 characters)")


class UpdateUserRequest(BaseModel):
    """Full profile replacement; every field is required."""
    username: str = Field(..., min_length=3, max_length=50, description="Username")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, description="Password (minimum 6 characters)")


class UserResponse(BaseModel):
    """User response schema (without password)."""
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Registration response schema."""
    user: UserResponse
    message: str


class LoginResponse(BaseModel):
    """Login response schema."""
    identifier: str
    message: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str
