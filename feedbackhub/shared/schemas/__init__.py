"""Pydantic schemas for API requests and responses."""

from .auth import (
    LoginRequest,
    AdminRegisterRequest,
    ChangePasswordRequest,
    AdminResponse,
    AdminTokenResponse,
)
from .company import (
    CompanyUpsert,
    CompanyResponse,
    CompanySavedResponse,
)
from .employee import (
    EmployeeCreateRequest,
    EmployeeProfileUpdate,
    EmployeeResponse,
    EmployeeCreatedResponse,
    EmployeeTokenResponse,
)
from .error import ErrorResponse, MessageResponse
from .feedback import (
    Attachment,
    FeedbackCreate,
    FeedbackRespond,
    FeedbackResponse,
    FeedbackSubmittedResponse,
    FeedbackUpdatedResponse,
    FeedbackTemplate,
)
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    BookmarkCreate,
    BookmarkResponse,
)

__all__ = [
    # Auth
    "LoginRequest",
    "AdminRegisterRequest",
    "ChangePasswordRequest",
    "AdminResponse",
    "AdminTokenResponse",
    # Company
    "CompanyUpsert",
    "CompanyResponse",
    "CompanySavedResponse",
    # Employee
    "EmployeeCreateRequest",
    "EmployeeProfileUpdate",
    "EmployeeResponse",
    "EmployeeCreatedResponse",
    "EmployeeTokenResponse",
    # Errors
    "ErrorResponse",
    "MessageResponse",
    # Feedback
    "Attachment",
    "FeedbackCreate",
    "FeedbackRespond",
    "FeedbackResponse",
    "FeedbackSubmittedResponse",
    "FeedbackUpdatedResponse",
    "FeedbackTemplate",
    # Property
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "BookmarkCreate",
    "BookmarkResponse",
]
