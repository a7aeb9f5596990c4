"""Administrator account API tests."""

from unittest.mock import AsyncMock, patch
from uuid import UUID

from feedbackhub.shared.db.repositories.employees import AdministratorRepository
from feedbackhub.web.auth import hash_password

from support import ApiTestCase, auth


class AdminAccountTests(ApiTestCase):
    def test_register_returns_token_and_admin(self) -> None:
        token, admin = self.register_admin(email="boss@acme.com", company_name="Acme")

        self.assertTrue(token)
        self.assertEqual(admin["email"], "boss@acme.com")
        self.assertEqual(admin["companyName"], "Acme")
        self.assertEqual(admin["role"], "admin")
        self.assertNotIn("passwordHash", admin)

        response = self.client.get("/api/admins/me", headers=auth(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["id"], admin["id"])

    def test_register_duplicate_email_is_rejected(self) -> None:
        self.register_admin(email="boss@acme.com")

        response = self.client.post(
            "/api/admins/register",
            json={"username": "b", "email": "boss@acme.com", "password": "secret123", "companyName": "Other"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "CONFLICT")

    def test_register_with_short_password_is_rejected(self) -> None:
        response = self.client.post(
            "/api/admins/register",
            json={"username": "b", "email": "boss@acme.com", "password": "123", "companyName": "Acme"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "VALIDATION_ERROR")

    def test_login_with_wrong_password_or_unknown_email(self) -> None:
        self.register_admin(email="boss@acme.com", password="secret123")

        wrong_password = self.client.post(
            "/api/admins/login", json={"email": "boss@acme.com", "password": "nope-nope"}
        )
        unknown_email = self.client.post(
            "/api/admins/login", json={"email": "ghost@acme.com", "password": "secret123"}
        )

        for response in (wrong_password, unknown_email):
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["message"], "Invalid credentials")

    def test_login_without_fields_names_them(self) -> None:
        response = self.client.post("/api/admins/login", json={"email": "boss@acme.com"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Please provide email and password")

    def test_login_succeeds(self) -> None:
        self.register_admin(email="boss@acme.com", password="secret123")

        response = self.client.post(
            "/api/admins/login", json={"email": "boss@acme.com", "password": "secret123"}
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("token", response.json())

    def test_change_password_replaces_old_password(self) -> None:
        token, _ = self.register_admin(email="boss@acme.com", password="secret123")

        wrong = self.client.put(
            "/api/admins/change-password",
            json={"currentPassword": "not-it", "newPassword": "brand-new-pass"},
            headers=auth(token),
        )
        self.assertEqual(wrong.status_code, 400)
        self.assertEqual(wrong.json()["message"], "Current password is incorrect")

        changed = self.client.put(
            "/api/admins/change-password",
            json={"currentPassword": "secret123", "newPassword": "brand-new-pass"},
            headers=auth(token),
        )
        self.assertEqual(changed.status_code, 200)

        old = self.client.post("/api/admins/login", json={"email": "boss@acme.com", "password": "secret123"})
        new = self.client.post("/api/admins/login", json={"email": "boss@acme.com", "password": "brand-new-pass"})
        self.assertEqual(old.status_code, 400)
        self.assertEqual(new.status_code, 200)

    def test_single_character_username_is_accepted(self) -> None:
        _, admin = self.register_admin(email="a@one.com", company_name="One")

        self.assertEqual(admin["username"], "a")

    def test_login_with_mixed_case_email(self) -> None:
        _, admin = self.register_admin(email="Owner@Acme.COM", password="secret123")
        self.assertEqual(admin["email"], "owner@acme.com")

        for email in ("Owner@Acme.COM", "owner@acme.com", " OWNER@acme.com"):
            response = self.client.post("/api/admins/login", json={"email": email, "password": "secret123"})
            self.assertEqual(response.status_code, 200, email)

        duplicate = self.client.post(
            "/api/admins/register",
            json={"username": "x", "email": "OWNER@acme.com", "password": "secret123", "companyName": "Other"},
        )
        self.assertEqual(duplicate.json()["error"], "CONFLICT")

    def test_registration_racing_on_one_email_is_a_conflict(self) -> None:
        self.register_admin(email="boss@acme.com")

        # Both requests passed the existence check before either was stored
        with patch.object(AdministratorRepository, "email_exists", AsyncMock(return_value=False)):
            response = self.client.post(
                "/api/admins/register",
                json={"username": "b", "email": "boss@acme.com", "password": "secret123", "companyName": "Other"},
            )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"message": "Administrator with this email already exists", "error": "CONFLICT"},
        )
        # The failed write left the session usable for the next request
        self.assertEqual(
            self.client.post("/api/admins/login", json={"email": "boss@acme.com", "password": "secret123"}).status_code,
            200,
        )

    def test_concurrent_password_changes_keep_the_last_write(self) -> None:
        _, admin = self.register_admin(email="boss@acme.com", password="secret123")
        admin_id = UUID(admin["id"])

        # Two changes that both verified the old password; the later write lands second
        hashes = [self.client.portal.call(hash_password, p) for p in ("first-new-pass", "second-new-pass")]
        for password_hash in hashes:
            self.run_in_session(
                lambda session, h=password_hash: AdministratorRepository(session).set_password_hash(admin_id, h)
            )

        def login(password):
            return self.client.post("/api/admins/login", json={"email": "boss@acme.com", "password": password})

        self.assertEqual(login("second-new-pass").status_code, 200)
        self.assertEqual(login("first-new-pass").status_code, 400)
        self.assertEqual(login("secret123").status_code, 400)


class AdminRegistrationDisabledTests(ApiTestCase):
    config_overrides = {"REGISTRATION_ENABLED": False}

    def test_register_is_forbidden(self) -> None:
        response = self.client.post(
            "/api/admins/register",
            json={"username": "b", "email": "boss@acme.com", "password": "secret123", "companyName": "Acme"},
        )

        self.assertEqual(response.status_code, 403)


class AuthenticationGateTests(ApiTestCase):
    def test_missing_token_is_unauthenticated(self) -> None:
        response = self.client.get("/api/admins/me")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"message": "No token, authorization denied", "error": "UNAUTHENTICATED"},
        )

    def test_invalid_token_is_rejected(self) -> None:
        response = self.client.get("/api/admins/me", headers=auth("garbage"))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Token is not valid", "error": "INVALID_TOKEN"})

    def test_logout_revokes_the_presented_token(self) -> None:
        token, _ = self.register_admin()
        second = self.client.post(
            "/api/admins/login", json={"email": "owner@acme.com", "password": "secret123"}
        ).json()["token"]

        response = self.client.post("/api/admins/logout", headers=auth(token))
        self.assertEqual(response.status_code, 200)

        revoked = self.client.get("/api/admins/me", headers=auth(token))
        self.assertEqual(revoked.status_code, 401)
        self.assertEqual(revoked.json()["error"], "INVALID_TOKEN")

        # Other sessions stay valid
        self.assertEqual(self.client.get("/api/admins/me", headers=auth(second)).status_code, 200)

    def test_employee_cannot_use_admin_routes(self) -> None:
        admin_token, _ = self.register_admin()
        employee_token, _ = self.provision_employee(admin_token)

        response = self.client.get("/api/admins/me", headers=auth(employee_token))

        self.assertEqual(response.status_code, 403)
