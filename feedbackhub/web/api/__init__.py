"""HTTP API module."""

from fastapi import APIRouter

from .admins import router as admins_router
from .bookmarks import router as bookmarks_router
from .company import router as company_router
from .employees import router as employees_router
from .feedback import router as feedback_router
from .properties import router as properties_router

# Create main API router
router = APIRouter(prefix="/api")

# Include sub-routers
router.include_router(admins_router, prefix="/admins", tags=["admins"])
router.include_router(employees_router, prefix="/employees", tags=["employees"])
router.include_router(company_router, prefix="/company", tags=["company"])
router.include_router(feedback_router, prefix="/feedback", tags=["feedback"])
router.include_router(properties_router, prefix="/properties", tags=["properties"])
router.include_router(bookmarks_router, prefix="/bookmarks", tags=["bookmarks"])
