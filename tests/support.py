"""Shared fixtures for API tests: in-memory database, test config, recording notifier."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from feedbackhub.shared.db.database import get_db
from feedbackhub.web.config import config
from feedbackhub.web.main import create_app
from feedbackhub.web.notifications import Notifier, get_notifier

TEST_SECRET = "test-signing-secret-0123456789abcdef"


class RecordingNotifier(Notifier):
    """Notifier that keeps every notification in memory."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.credentials = []
        self.feedback = []
        self.responses = []

    async def send_employee_credentials(self, email, username, password, company_name):
        if self.fail:
            raise RuntimeError("smtp unavailable")
        self.credentials.append(
            {"email": email, "username": username, "password": password, "company_name": company_name}
        )
        return True

    async def send_feedback_notification(self, receiver_email, subject, company_name, sender_name):
        if self.fail:
            raise RuntimeError("smtp unavailable")
        self.feedback.append({"receiver_email": receiver_email, "subject": subject})
        return True

    async def send_feedback_response(self, sender_email, subject, response, responder_name):
        if self.fail:
            raise RuntimeError("smtp unavailable")
        self.responses.append({"sender_email": sender_email, "response": response})
        return True


def patch_test_config(case: unittest.TestCase, **overrides) -> None:
    """Point ``config`` at an in-memory database and a fixed secret for one test."""
    values = {
        "DATABASE_URL": "sqlite+aiosqlite://",
        "DB_CREATE_ALL": True,
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "REVOCATION_BACKEND": "memory",
        "REGISTRATION_ENABLED": True,
        "ALLOW_LEGACY_EMPLOYEE_TOKENS": False,
    }
    values.update(overrides)
    for name, value in values.items():
        patcher = patch.object(config, name, value)
        patcher.start()
        case.addCleanup(patcher.stop)


def auth(token: str) -> dict:
    return {config.TOKEN_HEADER: token}


class ApiTestCase(unittest.TestCase):
    """Runs each test against a fresh app and empty database."""

    config_overrides: dict = {}
    raise_server_exceptions = True

    def setUp(self) -> None:
        patch_test_config(self, **self.config_overrides)

        self.notifier = RecordingNotifier()
        self.app = create_app()
        self.app.dependency_overrides[get_notifier] = lambda: self.notifier

        self.client = TestClient(self.app, raise_server_exceptions=self.raise_server_exceptions)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    # Helpers

    def register_admin(self, email="owner@acme.com", company_name="Acme", password="secret123"):
        response = self.client.post(
            "/api/admins/register",
            json={
                "username": email.split("@")[0],
                "email": email,
                "password": password,
                "companyName": company_name,
            },
        )
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        return body["token"], body["admin"]

    def add_employee(self, admin_token, email="worker@acme.com", role=None):
        """Provision an employee and return (employee, generated password)."""
        payload = {"username": email.split("@")[0], "email": email}
        if role:
            payload["role"] = role
        response = self.client.post("/api/employees/add", json=payload, headers=auth(admin_token))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["employee"], self.notifier.credentials[-1]["password"]

    def login_employee(self, email, password):
        response = self.client.post("/api/employees/login", json={"email": email, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["token"]

    def provision_employee(self, admin_token, email="worker@acme.com"):
        employee, password = self.add_employee(admin_token, email=email)
        return self.login_employee(email, password), employee

    def run_in_session(self, work):
        """Run ``work(session)`` on the app's event loop in one committed session."""

        async def runner():
            async with get_db() as session:
                return await work(session)

        return self.client.portal.call(runner)
