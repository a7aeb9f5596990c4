"""Authentication and administrator schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from .base import CamelModel, LoginEmail, NormalizedEmail


class LoginRequest(CamelModel):
    """Login request schema (administrators and employees)."""
    email: LoginEmail
    password: str = Field(..., min_length=1)


class AdminRegisterRequest(CamelModel):
    """Registration request schema (creates an administrator account)."""
    username: str = Field(..., min_length=1, max_length=255)
    email: NormalizedEmail
    password: str = Field(..., min_length=6)
    company_name: str = Field(..., min_length=1, max_length=255)


class ChangePasswordRequest(CamelModel):
    """Change password request schema."""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class AdminResponse(CamelModel):
    """Administrator response schema. Never carries the password hash."""
    id: UUID
    username: str
    email: str
    company_name: str
    role: str
    created_at: datetime


class AdminTokenResponse(CamelModel):
    token: str
    admin: AdminResponse
