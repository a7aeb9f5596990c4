"""Feedback endpoints."""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...shared.db.database import get_db_session
from ...shared.db.models import Administrator, Employee, Feedback, FeedbackStatus
from ...shared.db.repositories.employees import AdministratorRepository, GlobalEmployeeRepository
from ...shared.db.repositories.feedback import FeedbackRepository, GlobalFeedbackRepository
from ...shared.schemas.base import normalize_email
from ...shared.schemas.feedback import (
    FeedbackCreate,
    FeedbackRespond,
    FeedbackResponse,
    FeedbackSubmittedResponse,
    FeedbackSummary,
    FeedbackTemplate,
    FeedbackUpdatedResponse,
)
from ..auth.dependencies import AdminPrincipal, CurrentEmployee, CurrentPrincipal, ensure_admin, ensure_owner
from ..auth.jwt import Principal
from ..errors import Forbidden, NotFound, ValidationError
from ..logging_safety import log_ref
from ..notifications import Notifier, deliver, get_notifier

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load_admin(db: AsyncSession, auth: Principal) -> Administrator:
    admin = await AdministratorRepository(db).get_by_id(auth.id)
    if not admin:
        raise NotFound("Admin not found")
    return admin


async def _load_employee(db: AsyncSession, auth: Principal) -> Employee:
    employee = await GlobalEmployeeRepository(db).get_by_id(auth.id)
    if not employee:
        raise NotFound("Employee not found")
    return employee


async def _load_feedback(db: AsyncSession, feedback_id: UUID) -> Feedback:
    feedback = await GlobalFeedbackRepository(db).get_by_id(feedback_id)
    if not feedback:
        raise NotFound("Feedback not found")
    return feedback


def _summary(feedback: Feedback) -> FeedbackSubmittedResponse:
    return FeedbackSubmittedResponse(
        message="Feedback submitted successfully",
        feedback=FeedbackSummary.model_validate(feedback),
    )


@router.post("", response_model=FeedbackSubmittedResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    request: FeedbackCreate,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Send feedback from the administrator's company to a receiver.

    The receiver is notified; a failed notification does not fail the request.
    """
    admin = await _load_admin(db, auth)

    feedback = Feedback(
        sender_email=admin.email,
        receiver_email=request.receiver_email,
        subject=request.subject,
        description=request.description,
        company_name=admin.company_name,
        attachments=[a.model_dump() for a in request.attachments],
        status=FeedbackStatus.PENDING,
    )
    feedback = await FeedbackRepository(db, admin.id).create(feedback)
    logger.info(
        "feedback.submitted feedback_id=%s admin_id=%s",
        feedback.id,
        log_ref(admin.id),
    )

    await deliver(
        notifier.send_feedback_notification(
            feedback.receiver_email, feedback.subject, admin.company_name, admin.username
        ),
        event="feedback_received",
    )
    return _summary(feedback)


@router.get("/admin", response_model=List[FeedbackResponse])
async def list_admin_feedback(
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    List all feedback owned by the current administrator, newest first.
    """
    items = await FeedbackRepository(db, auth.id).list_recent()
    return [FeedbackResponse.model_validate(f) for f in items]


@router.get("/employee", response_model=List[FeedbackResponse])
async def list_employee_feedback(
    auth: CurrentPrincipal,
    email: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db_session),
):
    """
    List feedback where an employee is sender or receiver.

    Employees always get their own. Administrators must name the employee
    with ``?email=`` and only see feedback they own.
    """
    if auth.is_employee:
        employee = await _load_employee(db, auth)
        items = await GlobalFeedbackRepository(db).list_for_participant(employee.email)
    else:
        ensure_admin(auth, "Not authorized to view feedback")
        if not email:
            raise ValidationError("Employee email is required")
        items = await FeedbackRepository(db, auth.id).list_for_participant(normalize_email(email))

    return [FeedbackResponse.model_validate(f) for f in items]


@router.post("/employee", response_model=FeedbackSubmittedResponse, status_code=status.HTTP_201_CREATED)
async def submit_employee_feedback(
    request: FeedbackCreate,
    auth: CurrentEmployee,
    db: AsyncSession = Depends(get_db_session),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Send feedback as an employee.

    Sender and company are taken from the employee record, and the feedback
    belongs to the employee's administrator.
    """
    employee = await _load_employee(db, auth)

    feedback = Feedback(
        sender_email=employee.email,
        receiver_email=request.receiver_email,
        subject=request.subject,
        description=request.description,
        company_name=employee.company_name,
        attachments=[a.model_dump() for a in request.attachments],
        status=FeedbackStatus.PENDING,
    )
    feedback = await FeedbackRepository(db, employee.admin_id).create(feedback)
    logger.info(
        "feedback.submitted feedback_id=%s employee_id=%s",
        feedback.id,
        log_ref(employee.id),
    )

    await deliver(
        notifier.send_feedback_notification(
            feedback.receiver_email, feedback.subject, employee.company_name, employee.username
        ),
        event="feedback_received",
    )
    return _summary(feedback)


@router.get("/new", response_model=FeedbackTemplate)
async def new_feedback_template(
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Blank feedback for the compose screen.
    """
    admin = await _load_admin(db, auth)
    return FeedbackTemplate(sender_email=admin.email, sent_at=datetime.utcnow())


@router.get("/{feedback_id}", response_model=FeedbackResponse)
async def get_feedback(
    feedback_id: UUID,
    auth: CurrentPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Get one feedback item.

    Visible to the owning administrator and to an employee who is its sender
    or receiver.
    """
    feedback = await _load_feedback(db, feedback_id)

    if auth.is_administrator:
        ensure_owner(feedback.admin_id, auth, "Not authorized to view this feedback")
    else:
        employee = await _load_employee(db, auth)
        if employee.email not in (feedback.sender_email, feedback.receiver_email):
            raise Forbidden("Not authorized to view this feedback")

    return FeedbackResponse.model_validate(feedback)


@router.put("/respond/{feedback_id}", response_model=FeedbackUpdatedResponse)
async def respond_to_feedback(
    feedback_id: UUID,
    request: FeedbackRespond,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Respond to feedback as its owning administrator and notify the sender.
    """
    feedback = await _load_feedback(db, feedback_id)
    ensure_owner(feedback.admin_id, auth, "Not authorized to respond to this feedback")
    admin = await _load_admin(db, auth)

    feedback.response = request.response
    feedback.status = FeedbackStatus.RESPONDED
    feedback.responded_at = datetime.utcnow()
    feedback = await GlobalFeedbackRepository(db).update(feedback)

    await deliver(
        notifier.send_feedback_response(
            feedback.sender_email, feedback.subject, request.response, admin.username
        ),
        event="feedback_responded",
    )
    return FeedbackUpdatedResponse(
        message="Response sent successfully",
        feedback=FeedbackResponse.model_validate(feedback),
    )


@router.put("/review/{feedback_id}", response_model=FeedbackUpdatedResponse)
async def mark_reviewed(
    feedback_id: UUID,
    auth: AdminPrincipal,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Mark feedback as reviewed.
    """
    feedback = await _load_feedback(db, feedback_id)
    ensure_owner(feedback.admin_id, auth, "Not authorized to review this feedback")

    feedback.status = FeedbackStatus.REVIEWED
    feedback = await GlobalFeedbackRepository(db).update(feedback)

    return FeedbackUpdatedResponse(
        message="Feedback marked as reviewed",
        feedback=FeedbackResponse.model_validate(feedback),
    )


@router.put("/employee/respond/{feedback_id}", response_model=FeedbackUpdatedResponse)
async def employee_respond(
    feedback_id: UUID,
    request: FeedbackRespond,
    auth: CurrentEmployee,
    db: AsyncSession = Depends(get_db_session),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Respond to feedback addressed to the current employee.
    """
    feedback = await _load_feedback(db, feedback_id)
    employee = await _load_employee(db, auth)
    if feedback.receiver_email != employee.email:
        raise Forbidden("Not authorized to respond to this feedback")

    feedback.response = request.response
    feedback.status = FeedbackStatus.RESPONDED
    feedback.responded_at = datetime.utcnow()
    feedback = await GlobalFeedbackRepository(db).update(feedback)

    await deliver(
        notifier.send_feedback_response(
            feedback.sender_email, feedback.subject, request.response, employee.username
        ),
        event="feedback_responded",
    )
    return FeedbackUpdatedResponse(
        message="Response sent successfully",
        feedback=FeedbackResponse.model_validate(feedback),
    )
