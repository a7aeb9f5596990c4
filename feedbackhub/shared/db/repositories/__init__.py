"""Database repositories with administrator scoping."""

from .base import Repository, AdminScopedRepository, DuplicateEntityError
from .employees import AdministratorRepository, EmployeeRepository, GlobalEmployeeRepository
from .companies import CompanyRepository
from .feedback import FeedbackRepository, GlobalFeedbackRepository
from .properties import BookmarkRepository, PropertyRepository, GlobalPropertyRepository

__all__ = [
    # Base
    "Repository",
    "AdminScopedRepository",
    "DuplicateEntityError",
    # Administrator-scoped repositories
    "EmployeeRepository",
    "FeedbackRepository",
    "PropertyRepository",
    # Principal-scoped repositories
    "BookmarkRepository",
    # Unscoped repositories (auth and ownership checks)
    "AdministratorRepository",
    "CompanyRepository",
    "GlobalEmployeeRepository",
    "GlobalFeedbackRepository",
    "GlobalPropertyRepository",
]
