"""Feedback repository."""

from typing import List

from sqlalchemy import select, or_

from ..models import Feedback
from .base import AdminScopedRepository, Repository


class FeedbackRepository(AdminScopedRepository[Feedback]):
    """Repository for feedback owned by one administrator."""

    model = Feedback

    async def list_recent(self) -> List[Feedback]:
        """All feedback for this administrator, newest first."""
        query = self._base_query().order_by(Feedback.sent_at.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_for_participant(self, email: str) -> List[Feedback]:
        """This administrator's feedback where ``email`` is sender or receiver."""
        query = (
            self._base_query()
            .where(or_(Feedback.sender_email == email, Feedback.receiver_email == email))
            .order_by(Feedback.sent_at.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())


class GlobalFeedbackRepository(Repository[Feedback]):
    """Feedback lookups across administrators (employee views, ownership checks)."""

    model = Feedback

    async def list_for_participant(self, email: str) -> List[Feedback]:
        """Feedback where ``email`` is sender or receiver, newest first."""
        query = (
            select(Feedback)
            .where(or_(Feedback.sender_email == email, Feedback.receiver_email == email))
            .order_by(Feedback.sent_at.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
