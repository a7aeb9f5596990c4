"""Database module with async SQLAlchemy support."""

from .database import (
    get_db,
    get_db_session,
    init_db,
    close_db,
    get_engine,
    get_session_factory,
)
from .models import (
    Base,
    Administrator,
    Employee,
    Company,
    Feedback,
    Property,
    Bookmark,
    AdminRole,
    EmployeeRole,
    FeedbackStatus,
    PropertyStatus,
    OwnerKind,
)

__all__ = [
    # Database functions
    "get_db",
    "get_db_session",
    "init_db",
    "close_db",
    "get_engine",
    "get_session_factory",
    # Models
    "Base",
    "Administrator",
    "Employee",
    "Company",
    "Feedback",
    "Property",
    "Bookmark",
    # Enums
    "AdminRole",
    "EmployeeRole",
    "FeedbackStatus",
    "PropertyStatus",
    "OwnerKind",
]
