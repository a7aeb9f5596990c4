"""Company repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, func

from ..models import Company
from .base import Repository


class CompanyRepository(Repository[Company]):
    """Repository for company profiles (one per administrator)."""

    model = Company

    async def get_by_admin(self, admin_id: UUID) -> Optional[Company]:
        """Get the company owned by an administrator."""
        query = select(Company).where(Company.admin_id == admin_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Company]:
        """Get a company by name, ignoring case (exact match, no patterns)."""
        query = (
            select(Company)
            .where(func.lower(Company.name) == name.strip().lower())
            .order_by(Company.created_at)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
