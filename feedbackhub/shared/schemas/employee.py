"""Employee schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .base import CamelModel, NormalizedEmail


class EmployeeCreateRequest(CamelModel):
    """Provision employee request schema (admin only)."""
    username: str = Field(..., min_length=1, max_length=255)
    email: NormalizedEmail
    role: Optional[str] = Field(None, pattern="^(employee|manager)$")


class EmployeeProfileUpdate(CamelModel):
    """Employee self-service profile update."""
    username: str = Field(..., min_length=1, max_length=255)
    email: NormalizedEmail


class EmployeeResponse(CamelModel):
    """Employee response schema. Never carries the password hash."""
    id: UUID
    username: str
    email: str
    role: str
    company_name: str
    created_at: datetime


class EmployeeCreatedResponse(CamelModel):
    message: str
    email_sent: bool
    employee: EmployeeResponse


class EmployeeTokenResponse(CamelModel):
    token: str
    employee: EmployeeResponse
