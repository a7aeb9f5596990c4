"""Authentication module."""

from .jwt import (
    Principal,
    PrincipalKind,
    create_access_token,
    decode_token,
    verify_token,
)
from .password import hash_password, verify_password
from .dependencies import (
    get_current_principal,
    get_current_employee,
    require_admin,
    ensure_admin,
    ensure_owner,
    CurrentPrincipal,
    CurrentEmployee,
    AdminPrincipal,
)
from .revocation import get_revocation_store

__all__ = [
    "Principal",
    "PrincipalKind",
    "create_access_token",
    "decode_token",
    "verify_token",
    "hash_password",
    "verify_password",
    "get_current_principal",
    "get_current_employee",
    "require_admin",
    "ensure_admin",
    "ensure_owner",
    "CurrentPrincipal",
    "CurrentEmployee",
    "AdminPrincipal",
    "get_revocation_store",
]
