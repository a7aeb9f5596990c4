"""SQLAlchemy ORM models with per-administrator tenancy."""

import uuid
from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import (
    String,
    Text,
    Float,
    DateTime,
    ForeignKey,
    Enum,
    JSON,
    Index,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# Enums

class AdminRole(str, PyEnum):
    """Administrator role."""
    ADMIN = "admin"


class EmployeeRole(str, PyEnum):
    """Employee role within a company."""
    EMPLOYEE = "employee"
    MANAGER = "manager"


class FeedbackStatus(str, PyEnum):
    """Feedback thread status."""
    PENDING = "pending"
    REVIEWED = "reviewed"
    RESPONDED = "responded"


class PropertyStatus(str, PyEnum):
    """Property listing status."""
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"
    RENTED = "rented"


class OwnerKind(str, PyEnum):
    """Kind of principal owning a bookmark."""
    ADMINISTRATOR = "administrator"
    EMPLOYEE = "employee"


def _enum(enum_cls):
    return Enum(enum_cls, values_callable=lambda x: [e.value for e in x])


# Models

class Administrator(Base):
    """Administrator credential record; owns a company and its employees."""
    __tablename__ = "administrators"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[AdminRole] = mapped_column(
        _enum(AdminRole), default=AdminRole.ADMIN, nullable=False
    )
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_administrators_company_name", "company_name"),
    )


class Employee(Base):
    """Employee credential record, provisioned by an administrator."""
    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    admin_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("administrators.id", ondelete="CASCADE"), nullable=False
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[EmployeeRole] = mapped_column(
        _enum(EmployeeRole), default=EmployeeRole.EMPLOYEE, nullable=False
    )
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_employees_admin_id", "admin_id"),
    )


class Company(Base):
    """Company profile, one per administrator."""
    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    admin_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("administrators.id", ondelete="CASCADE"),
        unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    logo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    industry: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Nested groups kept as JSON documents: {email, phone}, {street, ...}, {linkedin, ...}
    contact: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    address: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    social_media: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    founded_year: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    employee_count: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_companies_name", "name"),
    )


class Feedback(Base):
    """Feedback item exchanged between an administrator's company and employees."""
    __tablename__ = "feedback"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    admin_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("administrators.id", ondelete="CASCADE"), nullable=False
    )
    sender_email: Mapped[str] = mapped_column(String(255), nullable=False)
    receiver_email: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    attachments: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    status: Mapped[FeedbackStatus] = mapped_column(
        _enum(FeedbackStatus), default=FeedbackStatus.PENDING, nullable=False
    )
    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    responded_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        Index("ix_feedback_admin_id", "admin_id"),
        Index("ix_feedback_sender_email", "sender_email"),
        Index("ix_feedback_receiver_email", "receiver_email"),
    )


class Property(Base):
    """Property listing published by an administrator."""
    __tablename__ = "properties"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    admin_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("administrators.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    property_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[PropertyStatus] = mapped_column(
        _enum(PropertyStatus), default=PropertyStatus.AVAILABLE, nullable=False
    )
    images: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_properties_admin_id", "admin_id"),
    )


class Bookmark(Base):
    """A principal's saved property."""
    __tablename__ = "bookmarks"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    owner_kind: Mapped[OwnerKind] = mapped_column(_enum(OwnerKind), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    # Relationships
    listing: Mapped["Property"] = relationship(
        "Property", lazy="joined"
    )

    __table_args__ = (
        UniqueConstraint("owner_kind", "owner_id", "property_id", name="uq_bookmark_owner_property"),
        Index("ix_bookmarks_owner", "owner_kind", "owner_id"),
    )
