"""Company profile endpoints."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...shared.db.database import get_db_session
from ...shared.db.models import Company
from ...shared.db.repositories.companies import CompanyRepository
from ...shared.db.repositories.employees import AdministratorRepository
from ...shared.schemas.company import CompanyResponse, CompanySavedResponse, CompanyUpsert
from ..auth.dependencies import AdminPrincipal
from ..errors import NotFound
from ..logging_safety import log_ref

logger = logging.getLogger(__name__)

router = APIRouter()

SCALAR_FIELDS = ("name", "logo", "description", "industry", "website", "founded_year", "employee_count")
GROUPED_FIELDS = {
    "contact": ("email", "phone"),
    "address": ("street", "city", "state", "zip_code", "country"),
    "social_media": ("linkedin", "twitter", "facebook", "instagram"),
}


def _apply(company: Company, request: CompanyUpsert) -> None:
    """Copy non-empty request values onto ``company``."""
    for field in SCALAR_FIELDS:
        value = getattr(request, field)
        if value:
            setattr(company, field, value)

    for group, fields in GROUPED_FIELDS.items():
        merged = dict(getattr(company, group) or {})
        for field in fields:
            value = getattr(request, field)
            if value:
                merged[field] = value
        # Reassign so SQLAlchemy sees the JSON column as changed
        setattr(company, group, merged)


@router.get("", response_model=CompanyResponse)
async def get_company(
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Get the current administrator's company profile.
    """
    company = await CompanyRepository(db).get_by_admin(auth.id)
    if not company:
        raise NotFound("Company information not found")
    return CompanyResponse.model_validate(company)


@router.post("", response_model=CompanySavedResponse)
async def save_company(
    request: CompanyUpsert,
    response: Response,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Create or update the current administrator's company profile.

    Returns 201 when the profile is created and 200 when it is updated. A new
    profile without a name takes the administrator's registered company name.
    """
    repo = CompanyRepository(db)
    company = await repo.get_by_admin(auth.id)

    if company:
        _apply(company, request)
        company = await repo.update(company)
        message = "Company information updated successfully"
    else:
        admin = await AdministratorRepository(db).get_by_id(auth.id)
        if not admin:
            raise NotFound("Admin not found")
        company = Company(admin_id=admin.id, name=admin.company_name, contact={}, address={}, social_media={})
        _apply(company, request)
        company = await repo.create(company)
        response.status_code = status.HTTP_201_CREATED
        message = "Company information created successfully"

    logger.info(
        "company.saved admin_id=%s created=%s",
        log_ref(auth.id),
        response.status_code == status.HTTP_201_CREATED,
    )
    return CompanySavedResponse(message=message, company=CompanyResponse.model_validate(company))


@router.delete("/logo", response_model=CompanySavedResponse)
async def delete_logo(
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Clear the company logo.
    """
    repo = CompanyRepository(db)
    company = await repo.get_by_admin(auth.id)
    if not company:
        raise NotFound("Company information not found")

    company.logo = None
    company = await repo.update(company)

    return CompanySavedResponse(
        message="Logo removed successfully",
        company=CompanyResponse.model_validate(company),
    )
