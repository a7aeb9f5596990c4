"""Outbound notifications for employee provisioning and feedback threads.

Delivery (email) is outside this service; the default notifier only records
that a notification was due. Notification failures never fail the request
that triggered them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Awaitable

from .logging_safety import RefKind, log_ref

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Notification channel interface."""

    @abstractmethod
    async def send_employee_credentials(
        self, email: str, username: str, password: str, company_name: str
    ) -> bool:
        """Deliver initial credentials to a newly provisioned employee."""

    @abstractmethod
    async def send_feedback_notification(
        self, receiver_email: str, subject: str, company_name: str, sender_name: str
    ) -> bool:
        """Tell the receiver that feedback is waiting."""

    @abstractmethod
    async def send_feedback_response(
        self, sender_email: str, subject: str, response: str, responder_name: str
    ) -> bool:
        """Tell the original sender that their feedback was answered."""


class LoggingNotifier(Notifier):
    """Notifier that logs the event without delivering anything."""

    async def send_employee_credentials(
        self, email: str, username: str, password: str, company_name: str
    ) -> bool:
        logger.info(
            "notify.employee_credentials recipient=%s company=%s",
            log_ref(email, RefKind.EMAIL),
            company_name,
        )
        return False

    async def send_feedback_notification(
        self, receiver_email: str, subject: str, company_name: str, sender_name: str
    ) -> bool:
        logger.info(
            "notify.feedback_received recipient=%s company=%s",
            log_ref(receiver_email, RefKind.EMAIL),
            company_name,
        )
        return False

    async def send_feedback_response(
        self, sender_email: str, subject: str, response: str, responder_name: str
    ) -> bool:
        logger.info(
            "notify.feedback_responded recipient=%s",
            log_ref(sender_email, RefKind.EMAIL),
        )
        return False


_notifier: Notifier = LoggingNotifier()


def get_notifier() -> Notifier:
    """FastAPI dependency returning the configured notifier."""
    return _notifier


async def deliver(notification: Awaitable[bool], event: str) -> bool:
    """Await a notification; log and report ``False`` if it raises."""
    try:
        return bool(await notification)
    except Exception:
        logger.exception("notify.failed event=%s", event)
        return False
