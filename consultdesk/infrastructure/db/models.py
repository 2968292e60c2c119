"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

import uuid

from sqlalchemy import (
    Column, String, DateTime, Text, Boolean,
    Numeric, Date, ForeignKey, JSON, Enum as SQLEnum,
    Index, UniqueConstraint, CheckConstraint, text
)
from sqlalchemy.orm import relationship

from consultdesk.domain.models.base import utc_now
from consultdesk.domain.models.invoice import InvoiceStatus
from consultdesk.domain.models.project import ProjectStatus
from consultdesk.domain.models.student import StudentLevel
from consultdesk.infrastructure.db.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


def enum_column(enum_class, name: str) -> SQLEnum:
    """Store enum values ("on-hold"), not member names."""
    return SQLEnum(
        enum_class,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


class UserModel(Base):
    """Consultant accounts"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(100), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    title = Column(String(255))
    address = Column(Text)
    phone = Column(String(50))

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)


class StudentModel(Base):
    """Students table"""
    __tablename__ = 'students'

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    program = Column(String(255), nullable=False)
    level = Column(enum_column(StudentLevel, 'student_level'), nullable=False)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    # Relationships
    assignments = relationship(
        "ProjectStudentModel",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_students_user_name', 'user_id', 'name'),
    )


class ProjectModel(Base):
    """Projects table"""
    __tablename__ = 'projects'

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    client_name = Column(String(255), nullable=False)

    hourly_rate = Column(Numeric(10, 2), nullable=False)
    estimated_hours = Column(Numeric(10, 2))
    status = Column(enum_column(ProjectStatus, 'project_status'), nullable=False, default=ProjectStatus.ACTIVE)
    start_date = Column(Date)
    deadline = Column(Date)
    software_tools = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    # Relationships
    time_entries = relationship(
        "TimeEntryModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    assignments = relationship(
        "ProjectStudentModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    invoices = relationship("InvoiceModel", back_populates="project", passive_deletes="all")

    __table_args__ = (
        Index('idx_projects_user_status', 'user_id', 'status'),
        Index('idx_projects_user_created', 'user_id', 'created_at'),
        CheckConstraint('hourly_rate >= 0', name='project_rate_non_negative'),
    )


class ProjectStudentModel(Base):
    """Project/student assignments"""
    __tablename__ = 'project_students'

    id = Column(String(36), primary_key=True, default=generate_id)
    project_id = Column(String(36), ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    role = Column(String(100))
    assigned_at = Column(DateTime, nullable=False, default=utc_now)

    # Relationships
    project = relationship("ProjectModel", back_populates="assignments")
    student = relationship("StudentModel", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint('project_id', 'student_id', name='uq_project_students_pair'),
        Index('idx_project_students_student', 'student_id'),
    )


class TimeEntryModel(Base):
    """Time entry table"""
    __tablename__ = 'time_entries'

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    project_id = Column(String(36), ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)

    description = Column(Text, nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime)
    duration = Column(Numeric(12, 6))  # hours
    is_running = Column(Boolean, nullable=False, default=False)
    software_used = Column(JSON, nullable=False, default=list)
    problems_encountered = Column(Text)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    # Relationships
    project = relationship("ProjectModel", back_populates="time_entries")

    # Constraints and indexes
    __table_args__ = (
        Index('idx_time_entries_user_start', 'user_id', 'start_time'),
        Index('idx_time_entries_project_start', 'project_id', 'start_time'),
        CheckConstraint('end_time IS NULL OR end_time >= start_time', name='time_entry_valid_range'),
        # At most one running timer per user
        Index(
            'uq_time_entries_running_user', 'user_id',
            unique=True,
            sqlite_where=text('is_running = 1'),
            postgresql_where=text('is_running'),
        ),
    )


class InvoiceModel(Base):
    """Invoices table"""
    __tablename__ = 'invoices'

    id = Column(String(36), primary_key=True, default=generate_id)
    invoice_number = Column(String(32), nullable=False, unique=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    project_id = Column(String(36), ForeignKey('projects.id', ondelete='RESTRICT'), nullable=False)
    client_name = Column(String(255), nullable=False)

    from_date = Column(Date, nullable=False)
    to_date = Column(Date, nullable=False)

    subtotal = Column(Numeric(10, 2), nullable=False)
    tax_rate = Column(Numeric(5, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    status = Column(enum_column(InvoiceStatus, 'invoice_status'), nullable=False, default=InvoiceStatus.DRAFT)
    due_date = Column(Date)
    paid_date = Column(Date)
    notes = Column(Text)

    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    # Relationships
    project = relationship("ProjectModel", back_populates="invoices")
    items = relationship(
        "InvoiceItemModel",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_invoices_user_status', 'user_id', 'status'),
        Index('idx_invoices_project', 'project_id'),
        CheckConstraint('from_date <= to_date', name='invoice_valid_period'),
        CheckConstraint('tax_rate >= 0 AND tax_rate <= 100', name='invoice_tax_rate_range'),
    )


class InvoiceItemModel(Base):
    """Invoice line items"""
    __tablename__ = 'invoice_items'

    id = Column(String(36), primary_key=True, default=generate_id)
    invoice_id = Column(String(36), ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False)
    time_entry_id = Column(String(36), ForeignKey('time_entries.id', ondelete='RESTRICT'), nullable=False)
    description = Column(Text, nullable=False)
    hours = Column(Numeric(12, 6), nullable=False)
    rate = Column(Numeric(10, 2), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)

    # Relationships
    invoice = relationship("InvoiceModel", back_populates="items")
    time_entry = relationship("TimeEntryModel")

    __table_args__ = (
        Index('idx_invoice_items_invoice', 'invoice_id'),
        Index('idx_invoice_items_time_entry', 'time_entry_id'),
    )


# Create tables if they don't exist (for development)
def create_all_tables(engine):
    """Create all tables in the database"""
    Base.metadata.create_all(bind=engine)
