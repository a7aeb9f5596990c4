"""JWT token issuing and verification.

A token carries exactly one principal payload, under ``admin`` or
``employee``::

    {"employee": {"id": "...", "role": "employee", "email": "..."},
     "exp": ..., "iat": ..., "jti": "..."}

Verification yields a :class:`Principal` or raises ``InvalidToken`` (bad
signature, expired, unparseable) or ``MalformedPrincipal`` (verified, but no
recognised payload).
"""

import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from jose import jwt, JWTError

from ..config import config
from ..errors import InvalidToken, MalformedPrincipal


class PrincipalKind(str, Enum):
    """Kind of authenticated identity."""
    ADMINISTRATOR = "administrator"
    EMPLOYEE = "employee"


# Claim key holding each kind's payload
PAYLOAD_KEYS = {
    PrincipalKind.ADMINISTRATOR: "admin",
    PrincipalKind.EMPLOYEE: "employee",
}

ADMIN_ROLE = "admin"
DEFAULT_EMPLOYEE_ROLE = "employee"


class Principal:
    """Authenticated identity attached to a request. Never persisted."""

    def __init__(
        self,
        kind: PrincipalKind,
        id: UUID,
        role: str,
        email: Optional[str] = None,
        token_id: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        legacy: bool = False,
    ):
        self.kind = kind
        self.id = id
        self.role = role
        self.email = email
        self.token_id = token_id
        self.expires_at = expires_at
        self.legacy = legacy

    @property
    def is_administrator(self) -> bool:
        return self.kind == PrincipalKind.ADMINISTRATOR

    @property
    def is_employee(self) -> bool:
        return self.kind == PrincipalKind.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        """Administrator principal holding the admin role."""
        return self.is_administrator and self.role == ADMIN_ROLE

    def __repr__(self) -> str:
        return f"Principal(kind={self.kind.value}, id={self.id}, role={self.role})"


def _signing_secret() -> str:
    return config.require_secret()


def create_access_token(
    kind: PrincipalKind,
    principal_id: UUID,
    role: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token for one principal.

    Args:
        kind: Administrator or employee
        principal_id: Credential record UUID
        role: Role embedded in the payload (admin, employee, manager)
        email: Optional email embedded for ownership checks on feedback
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.utcnow()
    if expires_delta is not None:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=config.JWT_EXPIRE_MINUTES)

    principal_payload = {"id": str(principal_id), "role": role}
    if email:
        principal_payload["email"] = email

    payload = {
        PAYLOAD_KEYS[kind]: principal_payload,
        "exp": expire,
        "iat": now,
        "jti": uuid.uuid4().hex,
    }

    return jwt.encode(payload, _signing_secret(), algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        InvalidToken: On bad signature, expiry or format
    """
    try:
        claims = jwt.decode(
            token,
            _signing_secret(),
            algorithms=[config.JWT_ALGORITHM],
        )
    except (JWTError, ValueError) as exc:
        raise InvalidToken() from exc

    if not isinstance(claims, dict):
        raise InvalidToken()
    return claims


def _parse_id(value: Any) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise MalformedPrincipal() from exc


def _principal_from_payload(
    kind: PrincipalKind, payload: Any, claims: dict[str, Any]
) -> Principal:
    if not isinstance(payload, dict) or not payload.get("id"):
        raise MalformedPrincipal()

    role = payload.get("role")
    if not isinstance(role, str) or not role:
        raise MalformedPrincipal()

    email = payload.get("email")
    return Principal(
        kind=kind,
        id=_parse_id(payload["id"]),
        role=role,
        email=email if isinstance(email, str) else None,
        token_id=claims.get("jti"),
        expires_at=_expiry(claims),
    )


def _expiry(claims: dict[str, Any]) -> Optional[datetime]:
    exp = claims.get("exp")
    if isinstance(exp, (int, float)):
        return datetime.utcfromtimestamp(exp)
    return None


def principal_from_claims(claims: dict[str, Any], allow_legacy: bool = False) -> Principal:
    """
    Map verified claims to exactly one principal.

    With ``allow_legacy`` a bare ``{"id": ..., "role"?: ...}`` token issued
    by older clients is accepted as an employee; the role defaults to
    ``employee``.

    Raises:
        MalformedPrincipal: If the claims hold no payload, or both
    """
    admin_payload = claims.get(PAYLOAD_KEYS[PrincipalKind.ADMINISTRATOR])
    employee_payload = claims.get(PAYLOAD_KEYS[PrincipalKind.EMPLOYEE])

    if admin_payload is not None and employee_payload is not None:
        raise MalformedPrincipal()

    if admin_payload is not None:
        return _principal_from_payload(PrincipalKind.ADMINISTRATOR, admin_payload, claims)

    if employee_payload is not None:
        return _principal_from_payload(PrincipalKind.EMPLOYEE, employee_payload, claims)

    if allow_legacy and claims.get("id"):
        role = claims.get("role")
        return Principal(
            kind=PrincipalKind.EMPLOYEE,
            id=_parse_id(claims["id"]),
            role=role if isinstance(role, str) and role else DEFAULT_EMPLOYEE_ROLE,
            token_id=claims.get("jti"),
            expires_at=_expiry(claims),
            legacy=True,
        )

    raise MalformedPrincipal()


def verify_token(token: str, allow_legacy: bool = False) -> Principal:
    """Verify a token and return its principal."""
    return principal_from_claims(decode_token(token), allow_legacy=allow_legacy)
