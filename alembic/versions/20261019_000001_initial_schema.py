"""Initial schema for the feedback platform.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create ENUM types
    op.execute("CREATE TYPE adminrole AS ENUM ('admin')")
    op.execute("CREATE TYPE employeerole AS ENUM ('employee', 'manager')")
    op.execute("CREATE TYPE feedbackstatus AS ENUM ('pending', 'reviewed', 'responded')")
    op.execute("CREATE TYPE propertystatus AS ENUM ('available', 'pending', 'sold', 'rented')")
    op.execute("CREATE TYPE ownerkind AS ENUM ('administrator', 'employee')")

    # Create administrators table
    op.create_table(
        'administrators',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('role', postgresql.ENUM('admin', name='adminrole', create_type=False), nullable=False, server_default='admin'),
        sa.Column('last_login', sa.DateTime, nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_administrators_company_name', 'administrators', ['company_name'])

    # Create employees table
    op.create_table(
        'employees',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('admin_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('administrators.id', ondelete='CASCADE'), nullable=False),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', postgresql.ENUM('employee', 'manager', name='employeerole', create_type=False), nullable=False, server_default='employee'),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('last_login', sa.DateTime, nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_employees_admin_id', 'employees', ['admin_id'])

    # Create companies table
    op.create_table(
        'companies',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('admin_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('administrators.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('logo', sa.String(500), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('industry', sa.String(255), nullable=True),
        sa.Column('website', sa.String(500), nullable=True),
        sa.Column('contact', sa.JSON, nullable=False),
        sa.Column('address', sa.JSON, nullable=False),
        sa.Column('social_media', sa.JSON, nullable=False),
        sa.Column('founded_year', sa.String(20), nullable=True),
        sa.Column('employee_count', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
    )

    # Create feedback table
    op.create_table(
        'feedback',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('admin_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('administrators.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_email', sa.String(255), nullable=False),
        sa.Column('receiver_email', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('attachments', sa.JSON, nullable=False),
        sa.Column('status', postgresql.ENUM('pending', 'reviewed', 'responded', name='feedbackstatus', create_type=False), nullable=False, server_default='pending'),
        sa.Column('response', sa.Text, nullable=True),
        sa.Column('sent_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
        sa.Column('responded_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_feedback_admin_id', 'feedback', ['admin_id'])
    op.create_index('ix_feedback_sender_email', 'feedback', ['sender_email'])
    op.create_index('ix_feedback_receiver_email', 'feedback', ['receiver_email'])

    # Create properties table
    op.create_table(
        'properties',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('admin_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('administrators.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('city', sa.String(255), nullable=True),
        sa.Column('property_type', sa.String(100), nullable=True),
        sa.Column('price', sa.Float, nullable=True),
        sa.Column('status', postgresql.ENUM('available', 'pending', 'sold', 'rented', name='propertystatus', create_type=False), nullable=False, server_default='available'),
        sa.Column('images', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_properties_admin_id', 'properties', ['admin_id'])

    # Create bookmarks table
    op.create_table(
        'bookmarks',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_kind', postgresql.ENUM('administrator', 'employee', name='ownerkind', create_type=False), nullable=False),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('property_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('note', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('owner_kind', 'owner_id', 'property_id', name='uq_bookmark_owner_property'),
    )
    op.create_index('ix_bookmarks_owner', 'bookmarks', ['owner_kind', 'owner_id'])


def downgrade() -> None:
    op.drop_table('bookmarks')
    op.drop_table('properties')
    op.drop_table('feedback')
    op.drop_table('companies')
    op.drop_table('employees')
    op.drop_table('administrators')

    op.execute("DROP TYPE ownerkind")
    op.execute("DROP TYPE propertystatus")
    op.execute("DROP TYPE feedbackstatus")
    op.execute("DROP TYPE employeerole")
    op.execute("DROP TYPE adminrole")
