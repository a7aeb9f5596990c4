"""Token issuing and verification."""

import unittest
import uuid
from datetime import datetime, timedelta
from unittest.mock import patch

from jose import jwt

from feedbackhub.web.auth.jwt import (
    PrincipalKind,
    create_access_token,
    decode_token,
    principal_from_claims,
    verify_token,
)
from feedbackhub.web.config import ConfigurationError, config
from feedbackhub.web.errors import InvalidToken, MalformedPrincipal

from support import TEST_SECRET, patch_test_config


def _sign(claims: dict, secret: str = TEST_SECRET) -> str:
    claims.setdefault("exp", datetime.utcnow() + timedelta(hours=1))
    return jwt.encode(claims, secret, algorithm="HS256")


class TokenRoundTripTests(unittest.TestCase):
    def setUp(self) -> None:
        patch_test_config(self)

    def test_administrator_token_round_trip(self) -> None:
        admin_id = uuid.uuid4()
        token = create_access_token(PrincipalKind.ADMINISTRATOR, admin_id, "admin", email="a@acme.com")

        principal = verify_token(token)

        self.assertEqual(principal.kind, PrincipalKind.ADMINISTRATOR)
        self.assertEqual(principal.id, admin_id)
        self.assertEqual(principal.role, "admin")
        self.assertEqual(principal.email, "a@acme.com")
        self.assertTrue(principal.is_admin)
        self.assertIsNotNone(principal.token_id)
        self.assertGreater(principal.expires_at, datetime.utcnow())

    def test_employee_token_round_trip(self) -> None:
        employee_id = uuid.uuid4()
        token = create_access_token(PrincipalKind.EMPLOYEE, employee_id, "manager")

        principal = verify_token(token)

        self.assertEqual(principal.kind, PrincipalKind.EMPLOYEE)
        self.assertEqual(principal.id, employee_id)
        self.assertEqual(principal.role, "manager")
        self.assertFalse(principal.is_admin)
        self.assertIsNone(principal.email)

    def test_each_token_gets_its_own_id(self) -> None:
        employee_id = uuid.uuid4()
        first = verify_token(create_access_token(PrincipalKind.EMPLOYEE, employee_id, "employee"))
        second = verify_token(create_access_token(PrincipalKind.EMPLOYEE, employee_id, "employee"))

        self.assertNotEqual(first.token_id, second.token_id)

    def test_tampered_signature_is_rejected(self) -> None:
        token = create_access_token(PrincipalKind.ADMINISTRATOR, uuid.uuid4(), "admin")
        other = create_access_token(PrincipalKind.ADMINISTRATOR, uuid.uuid4(), "admin")
        forged = _sign({"admin": {"id": str(uuid.uuid4()), "role": "admin"}}, secret="another-secret")
        header, payload, _ = token.split(".")
        spliced = ".".join([header, payload, other.split(".")[2]])

        with self.assertRaises(InvalidToken):
            decode_token(spliced)
        with self.assertRaises(InvalidToken):
            decode_token(forged)

    def test_expired_token_is_rejected(self) -> None:
        token = create_access_token(
            PrincipalKind.EMPLOYEE, uuid.uuid4(), "employee", expires_delta=timedelta(seconds=-5)
        )

        with self.assertRaises(InvalidToken):
            verify_token(token)

    def test_garbage_is_rejected(self) -> None:
        with self.assertRaises(InvalidToken):
            verify_token("not-a-token")

    def test_missing_secret_fails_issue_and_verify(self) -> None:
        token = create_access_token(PrincipalKind.EMPLOYEE, uuid.uuid4(), "employee")

        with patch.object(config, "JWT_SECRET", None):
            with self.assertRaises(ConfigurationError):
                create_access_token(PrincipalKind.EMPLOYEE, uuid.uuid4(), "employee")
            with self.assertRaises(ConfigurationError):
                verify_token(token)


class PrincipalShapeTests(unittest.TestCase):
    def test_token_with_both_payloads_is_malformed(self) -> None:
        claims = {
            "admin": {"id": str(uuid.uuid4()), "role": "admin"},
            "employee": {"id": str(uuid.uuid4()), "role": "employee"},
        }
        with self.assertRaises(MalformedPrincipal):
            principal_from_claims(claims)

    def test_token_without_payload_is_malformed(self) -> None:
        with self.assertRaises(MalformedPrincipal):
            principal_from_claims({"sub": "someone"})

    def test_payload_without_role_is_malformed(self) -> None:
        with self.assertRaises(MalformedPrincipal):
            principal_from_claims({"employee": {"id": str(uuid.uuid4())}})

    def test_payload_with_non_uuid_id_is_malformed(self) -> None:
        with self.assertRaises(MalformedPrincipal):
            principal_from_claims({"admin": {"id": "507f1f77bcf86cd799439011", "role": "admin"}})

    def test_bare_id_rejected_unless_legacy_allowed(self) -> None:
        employee_id = uuid.uuid4()
        claims = {"id": str(employee_id)}

        with self.assertRaises(MalformedPrincipal):
            principal_from_claims(claims)

        principal = principal_from_claims(claims, allow_legacy=True)
        self.assertEqual(principal.kind, PrincipalKind.EMPLOYEE)
        self.assertEqual(principal.id, employee_id)
        self.assertEqual(principal.role, "employee")
        self.assertTrue(principal.legacy)

    def test_administrator_with_other_role_is_not_admin(self) -> None:
        principal = principal_from_claims({"admin": {"id": str(uuid.uuid4()), "role": "auditor"}})

        self.assertTrue(principal.is_administrator)
        self.assertFalse(principal.is_admin)
