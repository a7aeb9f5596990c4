"""Administrator account endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...shared.db.database import get_db_session
from ...shared.db.models import Administrator, AdminRole
from ...shared.db.repositories.base import DuplicateEntityError
from ...shared.db.repositories.employees import AdministratorRepository
from ...shared.schemas.auth import (
    AdminRegisterRequest,
    AdminResponse,
    AdminTokenResponse,
    ChangePasswordRequest,
    LoginRequest,
)
from ...shared.schemas.error import MessageResponse
from ..auth import (
    PrincipalKind,
    create_access_token,
    hash_password,
    verify_password,
)
from ..auth.dependencies import AdminPrincipal, CurrentPrincipal
from ..auth.revocation import RevocationStore, get_revocation_store, revoke_token
from ..auth.password import password_too_long
from ..config import config
from ..errors import Conflict, Forbidden, NotFound, ValidationError
from ..logging_safety import log_ref

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials"


def issue_admin_token(admin: Administrator) -> str:
    return create_access_token(
        kind=PrincipalKind.ADMINISTRATOR,
        principal_id=admin.id,
        role=AdminRole(admin.role).value,
        email=admin.email,
    )


@router.post("/register", response_model=AdminTokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: AdminRegisterRequest,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Register a new administrator and company account.

    Returns a token so the new administrator is signed in immediately.
    """
    if not config.REGISTRATION_ENABLED:
        raise Forbidden("Registration is disabled")

    if password_too_long(request.password):
        raise ValidationError("Password is too long")

    admin_repo = AdministratorRepository(db)
    if await admin_repo.email_exists(request.email):
        raise Conflict("Administrator with this email already exists")

    admin = Administrator(
        username=request.username,
        email=request.email,
        password_hash=await hash_password(request.password),
        company_name=request.company_name,
        role=AdminRole.ADMIN,
    )
    try:
        admin = await admin_repo.create(admin)
    except DuplicateEntityError:
        raise Conflict("Administrator with this email already exists")
    logger.info("admin.registered admin_id=%s", log_ref(admin.id))

    return AdminTokenResponse(
        token=issue_admin_token(admin),
        admin=AdminResponse.model_validate(admin),
    )


@router.post("/login", response_model=AdminTokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Login with email and password.

    The same message is returned for an unknown email and a wrong password.
    """
    admin_repo = AdministratorRepository(db)

    admin = await admin_repo.get_by_email(request.email)
    if not admin:
        raise ValidationError(INVALID_CREDENTIALS)

    if not await verify_password(request.password, admin.password_hash):
        raise ValidationError(INVALID_CREDENTIALS)

    await admin_repo.update_last_login(admin)

    return AdminTokenResponse(
        token=issue_admin_token(admin),
        admin=AdminResponse.model_validate(admin),
    )


@router.get("/me", response_model=AdminResponse)
async def get_me(
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Get the current administrator.
    """
    admin = await AdministratorRepository(db).get_by_id(auth.id)
    if not admin:
        raise NotFound("Admin not found")
    return AdminResponse.model_validate(admin)


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Change the current administrator's password.
    """
    admin_repo = AdministratorRepository(db)
    admin = await admin_repo.get_by_id(auth.id)
    if not admin:
        raise NotFound("Admin not found")

    if not await verify_password(request.current_password, admin.password_hash):
        raise ValidationError("Current password is incorrect")

    if password_too_long(request.new_password):
        raise ValidationError("Password is too long")

    await admin_repo.set_password_hash(admin.id, await hash_password(request.new_password))
    logger.info("admin.password_changed admin_id=%s", log_ref(admin.id))

    return MessageResponse(message="Password updated successfully")


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: CurrentPrincipal,
    revocations: RevocationStore = Depends(get_revocation_store),
):
    """
    Logout by revoking the presented token.
    """
    await revoke_token(auth, revocations)
    return MessageResponse(message="Logged out successfully")
