"""Property listing endpoints."""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...shared.db.database import get_db_session
from ...shared.db.models import Property, PropertyStatus
from ...shared.db.repositories.employees import GlobalEmployeeRepository
from ...shared.db.repositories.properties import GlobalPropertyRepository, PropertyRepository
from ...shared.schemas.error import MessageResponse
from ...shared.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from ..auth.dependencies import AdminPrincipal, CurrentPrincipal, ensure_admin, ensure_owner
from ..auth.jwt import Principal
from ..errors import Forbidden, NotFound
from ..logging_safety import log_ref

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("title", "address", "status", "images")


async def visible_admin_id(db: AsyncSession, auth: Principal) -> UUID:
    """Administrator whose listings ``auth`` may see."""
    if auth.is_employee:
        employee = await GlobalEmployeeRepository(db).get_by_id(auth.id)
        if not employee:
            raise NotFound("Employee not found")
        return employee.admin_id
    ensure_admin(auth, "Not authorized to view properties")
    return auth.id


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    request: PropertyCreate,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Publish a property listing.
    """
    data = request.model_dump()
    data["status"] = PropertyStatus(data["status"])
    prop = await PropertyRepository(db, auth.id).create(Property(**data))
    logger.info(
        "property.created property_id=%s admin_id=%s",
        prop.id,
        log_ref(auth.id),
    )
    return PropertyResponse.model_validate(prop)


@router.get("", response_model=List[PropertyResponse])
async def list_properties(
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    List properties, newest first.

    Administrators see their own; employees see their administrator's.
    """
    admin_id = await visible_admin_id(db, auth)
    items = await PropertyRepository(db, admin_id).list_properties()
    return [PropertyResponse.model_validate(p) for p in items]


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: UUID,
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Get a property visible to the current principal.
    """
    prop = await GlobalPropertyRepository(db).get_by_id(property_id)
    if not prop:
        raise NotFound("Property not found")

    if prop.admin_id != await visible_admin_id(db, auth):
        raise Forbidden("Not authorized to view this property")

    return PropertyResponse.model_validate(prop)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: UUID,
    request: PropertyUpdate,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Update a property (owner only). Omitted fields are left unchanged.
    """
    repo = GlobalPropertyRepository(db)
    prop = await repo.get_by_id(property_id)
    if not prop:
        raise NotFound("Property not found")

    ensure_owner(prop.admin_id, auth, "Not authorized to update this property")

    update_data = request.model_dump(exclude_unset=True)
    if update_data.get("status"):
        update_data["status"] = PropertyStatus(update_data["status"])
    for field, value in update_data.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(prop, field, value)

    prop = await repo.update(prop)
    return PropertyResponse.model_validate(prop)


@router.delete("/{property_id}", response_model=MessageResponse)
async def delete_property(
    property_id: UUID,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Delete a property (owner only). Bookmarks of it are removed with it.
    """
    repo = GlobalPropertyRepository(db)
    prop = await repo.get_by_id(property_id)
    if not prop:
        raise NotFound("Property not found")

    ensure_owner(prop.admin_id, auth, "Not authorized to delete this property")

    await repo.delete(prop.id)
    logger.info(
        "property.deleted property_id=%s admin_id=%s",
        prop.id,
        log_ref(auth.id),
    )
    return MessageResponse(message="Property removed successfully")
