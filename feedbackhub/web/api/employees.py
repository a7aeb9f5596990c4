"""Employee management and employee self-service endpoints."""

import logging
import secrets
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...shared.db.database import get_db_session
from ...shared.db.models import Employee, EmployeeRole, OwnerKind
from ...shared.db.repositories.base import DuplicateEntityError
from ...shared.db.repositories.companies import CompanyRepository
from ...shared.db.repositories.employees import (
    AdministratorRepository,
    EmployeeRepository,
    GlobalEmployeeRepository,
)
from ...shared.db.repositories.properties import BookmarkRepository
from ...shared.schemas.auth import ChangePasswordRequest, LoginRequest
from ...shared.schemas.company import CompanyResponse
from ...shared.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeCreatedResponse,
    EmployeeProfileUpdate,
    EmployeeResponse,
    EmployeeTokenResponse,
)
from ...shared.schemas.error import MessageResponse
from ..auth import PrincipalKind, create_access_token, hash_password, verify_password
from ..auth.dependencies import CurrentEmployee, CurrentPrincipal, ensure_admin, ensure_owner
from ..auth.password import password_too_long
from ..auth.revocation import RevocationStore, get_revocation_store, revoke_token
from ..errors import Conflict, Forbidden, NotFound, ValidationError
from ..logging_safety import log_ref
from ..notifications import Notifier, deliver, get_notifier

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials"


def generate_password() -> str:
    """Random initial password for a provisioned employee."""
    return secrets.token_urlsafe(9)


async def _load_self(db: AsyncSession, auth) -> Employee:
    employee = await GlobalEmployeeRepository(db).get_by_id(auth.id)
    if not employee:
        raise NotFound("Employee not found")
    return employee


@router.post("/add", response_model=EmployeeCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_employee(
    request: EmployeeCreateRequest,
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Provision a new employee (admin only).

    A random password is generated, stored hashed, and sent to the employee
    through the notifier. A failed notification does not undo the account.
    """
    ensure_admin(auth, "Not authorized to add employees")

    global_repo = GlobalEmployeeRepository(db)
    if await global_repo.email_exists(request.email):
        raise Conflict("Employee with this email already exists")

    admin = await AdministratorRepository(db).get_by_id(auth.id)
    if not admin:
        raise NotFound("Admin not found")

    generated_password = generate_password()
    employee = Employee(
        username=request.username,
        email=request.email,
        password_hash=await hash_password(generated_password),
        company_name=admin.company_name,
        role=EmployeeRole(request.role or EmployeeRole.EMPLOYEE.value),
    )
    try:
        employee = await EmployeeRepository(db, admin.id).create(employee)
    except DuplicateEntityError:
        raise Conflict("Employee with this email already exists")
    logger.info(
        "employee.added employee_id=%s admin_id=%s",
        log_ref(employee.id),
        log_ref(admin.id),
    )

    email_sent = await deliver(
        notifier.send_employee_credentials(
            employee.email, employee.username, generated_password, admin.company_name
        ),
        event="employee_credentials",
    )

    return EmployeeCreatedResponse(
        message="Employee added successfully",
        email_sent=email_sent,
        employee=EmployeeResponse.model_validate(employee),
    )


@router.get("", response_model=List[EmployeeResponse])
async def list_employees(
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    List the employees provisioned by the current admin.
    """
    ensure_admin(auth, "Not authorized to view employees")

    employees = await EmployeeRepository(db, auth.id).list_employees()
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.post("/login", response_model=EmployeeTokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Employee login with email and password.

    The same message is returned for an unknown email and a wrong password.
    """
    repo = GlobalEmployeeRepository(db)

    employee = await repo.get_by_email(request.email)
    if not employee:
        raise ValidationError(INVALID_CREDENTIALS)

    if not await verify_password(request.password, employee.password_hash):
        raise ValidationError(INVALID_CREDENTIALS)

    await repo.update_last_login(employee)

    token = create_access_token(
        kind=PrincipalKind.EMPLOYEE,
        principal_id=employee.id,
        role=EmployeeRole(employee.role).value,
        email=employee.email,
    )
    return EmployeeTokenResponse(
        token=token,
        employee=EmployeeResponse.model_validate(employee),
    )


@router.get("/me", response_model=EmployeeResponse)
async def get_me(
    auth: CurrentEmployee,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Get the current employee's profile.
    """
    return EmployeeResponse.model_validate(await _load_self(db, auth))


@router.put("/profile", response_model=EmployeeResponse)
async def update_profile(
    request: EmployeeProfileUpdate,
    auth: CurrentEmployee,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Update the current employee's username and email.
    """
    employee = await _load_self(db, auth)
    repo = GlobalEmployeeRepository(db)

    if request.email != employee.email and await repo.email_exists(
        request.email, exclude_id=employee.id
    ):
        raise Conflict("Email is already in use by another employee")

    employee.username = request.username
    employee.email = request.email
    try:
        await repo.update(employee)
    except DuplicateEntityError:
        raise Conflict("Email is already in use by another employee")

    return EmployeeResponse.model_validate(employee)


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    auth: CurrentEmployee,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Change the current employee's password.

    Two concurrent changes for the same employee are last-write-wins.
    """
    employee = await _load_self(db, auth)

    if not await verify_password(request.current_password, employee.password_hash):
        raise ValidationError("Current password is incorrect")

    if password_too_long(request.new_password):
        raise ValidationError("Password is too long")

    repo = GlobalEmployeeRepository(db)
    await repo.set_password_hash(employee.id, await hash_password(request.new_password))
    logger.info(
        "employee.password_changed employee_id=%s",
        log_ref(employee.id),
    )

    return MessageResponse(message="Password updated successfully")


@router.get("/company-details", response_model=CompanyResponse)
async def get_company_details(
    auth: CurrentEmployee,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Get the company of the administrator who provisioned the current employee.
    """
    employee = await _load_self(db, auth)

    company = await CompanyRepository(db).get_by_admin(employee.admin_id)
    if not company:
        raise NotFound("Company information not found")

    return CompanyResponse.model_validate(company)


@router.get("/company-by-name/{company_name}", response_model=CompanyResponse)
async def get_company_by_name(
    company_name: str,
    auth: CurrentEmployee,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Look up a company by name, ignoring case.
    """
    if not company_name.strip():
        raise ValidationError("Company name is required")

    company = await CompanyRepository(db).get_by_name(company_name)
    if not company:
        raise NotFound("Company information not found")

    return CompanyResponse.model_validate(company)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: CurrentEmployee,
    revocations: RevocationStore = Depends(get_revocation_store),
):
    """
    Logout by revoking the presented token.
    """
    await revoke_token(auth, revocations)
    return MessageResponse(message="Logged out successfully")


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Get an employee by ID.

    Admins may read employees they provisioned; employees may read only
    themselves.
    """
    employee = await GlobalEmployeeRepository(db).get_by_id(employee_id)
    if not employee:
        raise NotFound("Employee not found")

    if auth.is_administrator:
        ensure_admin(auth, "Not authorized to access this employee")
        ensure_owner(employee.admin_id, auth, "Not authorized to access this employee")
    elif employee.id != auth.id:
        raise Forbidden("Not authorized to access this employee")

    return EmployeeResponse.model_validate(employee)


@router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: UUID,
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Delete an employee (admin only, own employees only).
    """
    ensure_admin(auth, "Not authorized to delete employees")

    repo = GlobalEmployeeRepository(db)
    employee = await repo.get_by_id(employee_id)
    if not employee:
        raise NotFound("Employee not found")

    ensure_owner(employee.admin_id, auth, "Not authorized to delete this employee")

    # Bookmarks reference their owner without a foreign key
    removed = await BookmarkRepository(db, OwnerKind.EMPLOYEE, employee.id).delete_all()
    await repo.delete(employee.id)
    logger.info(
        "employee.deleted employee_id=%s admin_id=%s bookmarks=%s",
        log_ref(employee.id),
        log_ref(auth.id),
        removed,
    )

    return MessageResponse(message="Employee removed successfully")
