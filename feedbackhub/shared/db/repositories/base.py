"""Base repositories with administrator scoping."""

from typing import TypeVar, Generic, Optional, Type
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Base

T = TypeVar("T", bound=Base)


class DuplicateEntityError(Exception):
    """A write collided with a unique constraint, e.g. two concurrent sign-ups."""


class Repository(Generic[T]):
    """Unscoped lookups and writes for a single model."""

    model: Type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> Optional[T]:
        """Get entity by ID."""
        query = select(self.model).where(self.model.id == id)
        result = await self.session.execute(query)
        return result.unique().scalar_one_or_none()

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError(self.model.__name__) from exc

    async def create(self, entity: T) -> T:
        """Create a new entity."""
        self.session.add(entity)
        await self._flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        """Update an existing entity."""
        await self._flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, id: UUID) -> bool:
        """Delete an entity by ID."""
        query = delete(self.model).where(self.model.id == id)
        result = await self.session.execute(query)
        return result.rowcount > 0


class AdminScopedRepository(Repository[T]):
    """
    Repository whose listings are filtered by the owning administrator.

    Single-entity lookups stay unscoped so callers can tell a missing
    resource (404) from one owned by someone else (403).
    """

    def __init__(self, session: AsyncSession, admin_id: UUID):
        super().__init__(session)
        self.admin_id = admin_id

    def _base_query(self):
        """Get base query filtered by owning administrator."""
        return select(self.model).where(self.model.admin_id == self.admin_id)

    async def create(self, entity: T) -> T:
        """Create a new entity owned by this administrator."""
        entity.admin_id = self.admin_id
        return await super().create(entity)

