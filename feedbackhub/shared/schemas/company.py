"""Company profile schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .base import CamelModel


class ContactInfo(CamelModel):
    email: Optional[str] = None
    phone: Optional[str] = None


class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class SocialMedia(CamelModel):
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None


class CompanyUpsert(CamelModel):
    """Create-or-update company request.

    Address and social fields arrive flat, the way the admin form posts them.
    Empty values leave the stored field untouched.
    """
    name: Optional[str] = Field(None, max_length=255)
    logo: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    industry: Optional[str] = Field(None, max_length=255)
    website: Optional[str] = Field(None, max_length=500)
    email: Optional[str] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    founded_year: Optional[str] = None
    employee_count: Optional[str] = None


class CompanyResponse(CamelModel):
    """Company response schema."""
    id: UUID
    admin_id: UUID
    name: str
    logo: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    contact: ContactInfo = Field(default_factory=ContactInfo)
    address: Address = Field(default_factory=Address)
    social_media: SocialMedia = Field(default_factory=SocialMedia)
    founded_year: Optional[str] = None
    employee_count: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CompanySavedResponse(CamelModel):
    message: str
    company: CompanyResponse
