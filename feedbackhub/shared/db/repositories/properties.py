"""Property and bookmark repositories."""

from typing import Optional, List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Bookmark, OwnerKind, Property
from .base import AdminScopedRepository, Repository


class PropertyRepository(AdminScopedRepository[Property]):
    """Repository for properties published by one administrator."""

    model = Property

    async def list_properties(self) -> List[Property]:
        """All properties of this administrator, newest first."""
        query = self._base_query().order_by(Property.created_at.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())


class GlobalPropertyRepository(Repository[Property]):
    """Unscoped property lookups for ownership checks."""

    model = Property


class BookmarkRepository(Repository[Bookmark]):
    """Repository for one principal's bookmarks."""

    model = Bookmark

    def __init__(self, session: AsyncSession, owner_kind: OwnerKind, owner_id: UUID):
        super().__init__(session)
        self.owner_kind = owner_kind
        self.owner_id = owner_id

    def _base_query(self):
        return (
            select(Bookmark)
            .where(Bookmark.owner_kind == self.owner_kind)
            .where(Bookmark.owner_id == self.owner_id)
        )

    async def list_bookmarks(self) -> List[Bookmark]:
        query = self._base_query().order_by(Bookmark.created_at.desc())
        result = await self.session.execute(query)
        return list(result.unique().scalars().all())

    async def get_for_property(self, property_id: UUID) -> Optional[Bookmark]:
        query = self._base_query().where(Bookmark.property_id == property_id)
        result = await self.session.execute(query)
        return result.unique().scalar_one_or_none()

    async def create(self, entity: Bookmark) -> Bookmark:
        """Create a bookmark owned by this principal."""
        entity.owner_kind = self.owner_kind
        entity.owner_id = self.owner_id
        self.session.add(entity)
        await self._flush()
        # Reload so the joined property is populated
        query = (
            select(Bookmark)
            .where(Bookmark.id == entity.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.unique().scalar_one()


    async def delete_all(self) -> int:
        """Remove every bookmark of this principal. Returns the number removed."""
        query = (
            delete(Bookmark)
            .where(Bookmark.owner_kind == self.owner_kind)
            .where(Bookmark.owner_id == self.owner_id)
        )
        result = await self.session.execute(query)
        return result.rowcount
