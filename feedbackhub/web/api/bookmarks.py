"""Property bookmark endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...shared.db.database import get_db_session
from ...shared.db.models import Bookmark, OwnerKind
from ...shared.db.repositories.base import DuplicateEntityError
from ...shared.db.repositories.properties import BookmarkRepository, GlobalPropertyRepository
from ...shared.schemas.error import MessageResponse
from ...shared.schemas.property import BookmarkCreate, BookmarkResponse, PropertyResponse
from ..auth.dependencies import CurrentPrincipal
from ..auth.jwt import Principal
from ..errors import Conflict, Forbidden, NotFound
from .properties import visible_admin_id

router = APIRouter()


def _repo(db: AsyncSession, auth: Principal) -> BookmarkRepository:
    return BookmarkRepository(db, OwnerKind(auth.kind.value), auth.id)


def _to_response(bookmark: Bookmark) -> BookmarkResponse:
    return BookmarkResponse(
        id=bookmark.id,
        property_id=bookmark.property_id,
        note=bookmark.note,
        created_at=bookmark.created_at,
        property=PropertyResponse.model_validate(bookmark.listing) if bookmark.listing else None,
    )


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def add_bookmark(
    request: BookmarkCreate,
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Bookmark a property the current principal can see.
    """
    prop = await GlobalPropertyRepository(db).get_by_id(request.property_id)
    if not prop:
        raise NotFound("Property not found")

    if prop.admin_id != await visible_admin_id(db, auth):
        raise Forbidden("Not authorized to bookmark this property")

    repo = _repo(db, auth)
    if await repo.get_for_property(prop.id):
        raise Conflict("Property already bookmarked")

    try:
        bookmark = await repo.create(Bookmark(property_id=prop.id, note=request.note))
    except DuplicateEntityError:
        raise Conflict("Property already bookmarked")
    return _to_response(bookmark)


@router.get("", response_model=List[BookmarkResponse])
async def list_bookmarks(
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    List the current principal's bookmarks, newest first.
    """
    return [_to_response(b) for b in await _repo(db, auth).list_bookmarks()]


@router.delete("/{bookmark_id}", response_model=MessageResponse)
async def delete_bookmark(
    bookmark_id: UUID,
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Remove a bookmark (owner only).
    """
    repo = _repo(db, auth)
    bookmark = await repo.get_by_id(bookmark_id)
    if not bookmark:
        raise NotFound("Bookmark not found")

    if bookmark.owner_kind != OwnerKind(auth.kind.value) or bookmark.owner_id != auth.id:
        raise Forbidden("Not authorized to remove this bookmark")

    await repo.delete(bookmark.id)
    return MessageResponse(message="Bookmark removed successfully")
