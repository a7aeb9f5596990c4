"""API error response schemas."""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""
    message: str
    error: Optional[str] = None


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""
    message: str
