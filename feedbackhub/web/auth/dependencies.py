"""FastAPI authentication dependencies."""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from ..config import config
from ..errors import ApiError, Forbidden, InvalidToken, Unauthenticated
from ..logging_safety import log_ref
from .jwt import Principal, verify_token
from .revocation import RevocationStore, get_revocation_store

logger = logging.getLogger(__name__)

token_header_scheme = APIKeyHeader(
    name=config.TOKEN_HEADER,
    auto_error=False,
    scheme_name="authToken",
)


def _reject(request: Request, reason: str, error: ApiError) -> ApiError:
    logger.warning(
        "auth.rejected method=%s path=%s reason=%s",
        request.method,
        request.url.path,
        reason,
    )
    return error


async def _authenticate(
    request: Request,
    token: Optional[str],
    revocations: RevocationStore,
    allow_legacy: bool,
) -> Principal:
    if not token:
        raise _reject(request, "missing_token", Unauthenticated())

    try:
        principal = verify_token(token, allow_legacy=allow_legacy)
    except ApiError as exc:
        raise _reject(request, exc.code.lower(), exc) from exc

    if principal.token_id and await revocations.is_revoked(principal.token_id):
        raise _reject(request, "revoked", InvalidToken())

    logger.debug(
        "auth.accepted method=%s path=%s principal_id=%s kind=%s role=%s legacy=%s",
        request.method,
        request.url.path,
        log_ref(principal.id),
        principal.kind.value,
        principal.role,
        principal.legacy,
    )
    return principal


async def get_current_principal(
    request: Request,
    token: Annotated[Optional[str], Security(token_header_scheme)],
    revocations: Annotated[RevocationStore, Depends(get_revocation_store)],
) -> Principal:
    """
    Administrator-or-employee gate.

    Raises:
        Unauthenticated: No token presented
        InvalidToken: Bad signature, expired, or revoked
        MalformedPrincipal: Token carries neither payload
    """
    principal = await _authenticate(request, token, revocations, allow_legacy=False)
    request.state.principal = principal
    return principal


async def get_current_employee(
    request: Request,
    token: Annotated[Optional[str], Security(token_header_scheme)],
    revocations: Annotated[RevocationStore, Depends(get_revocation_store)],
) -> Principal:
    """
    Employee-only gate.

    Administrator tokens are rejected. Bare-id legacy tokens pass only when
    ``ALLOW_LEGACY_EMPLOYEE_TOKENS`` is enabled.
    """
    principal = await _authenticate(
        request, token, revocations, allow_legacy=config.ALLOW_LEGACY_EMPLOYEE_TOKENS
    )
    if not principal.is_employee:
        raise _reject(request, "not_employee", InvalidToken())
    request.state.principal = principal
    return principal


async def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """
    Require an administrator holding the admin role.

    Raises:
        Forbidden: If the principal is not an admin
    """
    ensure_admin(principal, "Admin access required")
    return principal


def ensure_admin(principal: Principal, message: str) -> None:
    """Raise ``Forbidden`` with ``message`` unless the principal is an admin."""
    if not principal.is_admin:
        raise Forbidden(message)


def ensure_owner(owner_id, principal: Principal, message: str) -> None:
    """Raise ``Forbidden`` unless ``owner_id`` is the principal's id."""
    if owner_id != principal.id:
        raise Forbidden(message)


# Type aliases for cleaner route signatures
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
CurrentEmployee = Annotated[Principal, Depends(get_current_employee)]
AdminPrincipal = Annotated[Principal, Depends(require_admin)]
