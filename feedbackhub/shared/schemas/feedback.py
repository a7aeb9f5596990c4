"""Feedback schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .base import CamelModel, NormalizedEmail


class Attachment(CamelModel):
    """Attachment metadata. Files themselves are stored elsewhere."""
    filename: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=1000)
    mimetype: Optional[str] = Field(None, max_length=255)


class FeedbackCreate(CamelModel):
    """Submit feedback request schema."""
    receiver_email: NormalizedEmail
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    attachments: List[Attachment] = Field(default_factory=list, max_length=5)


class FeedbackRespond(CamelModel):
    response: str = Field(..., min_length=1)


class FeedbackResponse(CamelModel):
    """Full feedback item."""
    id: UUID
    admin_id: UUID
    sender_email: str
    receiver_email: str
    subject: str
    description: str
    company_name: str
    attachments: List[Attachment] = Field(default_factory=list)
    status: str
    response: Optional[str] = None
    sent_at: datetime
    responded_at: Optional[datetime] = None


class FeedbackSummary(CamelModel):
    id: UUID
    subject: str
    sent_at: datetime


class FeedbackSubmittedResponse(CamelModel):
    message: str
    feedback: FeedbackSummary


class FeedbackUpdatedResponse(CamelModel):
    message: str
    feedback: FeedbackResponse


class FeedbackTemplate(CamelModel):
    """Blank feedback used by the compose screen."""
    id: str = "new"
    subject: str = ""
    description: str = ""
    sender_email: Optional[str] = None
    receiver_email: str = ""
    status: str = "pending"
    attachments: List[Attachment] = Field(default_factory=list)
    sent_at: datetime
    is_new: bool = True
