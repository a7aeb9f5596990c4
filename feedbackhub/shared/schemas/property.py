"""Property and bookmark schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .base import CamelModel

PROPERTY_STATUS_PATTERN = "^(available|pending|sold|rented)$"


class PropertyCreate(CamelModel):
    """Create property request schema."""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    address: str = Field(..., min_length=1, max_length=500)
    city: Optional[str] = Field(None, max_length=255)
    property_type: Optional[str] = Field(None, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    status: str = Field(default="available", pattern=PROPERTY_STATUS_PATTERN)
    images: List[str] = Field(default_factory=list)


class PropertyUpdate(CamelModel):
    """Update property request schema."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    city: Optional[str] = Field(None, max_length=255)
    property_type: Optional[str] = Field(None, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[str] = Field(None, pattern=PROPERTY_STATUS_PATTERN)
    images: Optional[List[str]] = None


class PropertyResponse(CamelModel):
    id: UUID
    admin_id: UUID
    title: str
    description: Optional[str] = None
    address: str
    city: Optional[str] = None
    property_type: Optional[str] = None
    price: Optional[float] = None
    status: str
    images: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class BookmarkCreate(CamelModel):
    property_id: UUID
    note: Optional[str] = Field(None, max_length=1000)


class BookmarkResponse(CamelModel):
    id: UUID
    property_id: UUID
    note: Optional[str] = None
    created_at: datetime
    property: Optional[PropertyResponse] = None
