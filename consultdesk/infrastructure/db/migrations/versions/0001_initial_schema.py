"""Initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


student_level = sa.Enum('PhD', 'MS', 'BS', 'Undergraduate', 'Graduate', name='student_level')
project_status = sa.Enum('active', 'on-hold', 'completed', 'cancelled', name='project_status')
invoice_status = sa.Enum('draft', 'sent', 'paid', 'cancelled', name='invoice_status')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('title', sa.String(255)),
        sa.Column('address', sa.Text()),
        sa.Column('phone', sa.String(50)),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'students',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('program', sa.String(255), nullable=False),
        sa.Column('level', student_level, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_students_user_name', 'students', ['user_id', 'name'])

    op.create_table(
        'projects',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('client_name', sa.String(255), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('estimated_hours', sa.Numeric(10, 2)),
        sa.Column('status', project_status, nullable=False),
        sa.Column('start_date', sa.Date()),
        sa.Column('deadline', sa.Date()),
        sa.Column('software_tools', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('hourly_rate >= 0', name='project_rate_non_negative'),
    )
    op.create_index('idx_projects_user_status', 'projects', ['user_id', 'status'])
    op.create_index('idx_projects_user_created', 'projects', ['user_id', 'created_at'])

    op.create_table(
        'project_students',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.String(36), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role', sa.String(100)),
        sa.Column('assigned_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('project_id', 'student_id', name='uq_project_students_pair'),
    )
    op.create_index('idx_project_students_student', 'project_students', ['student_id'])

    op.create_table(
        'time_entries',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime()),
        sa.Column('duration', sa.Numeric(12, 6)),
        sa.Column('is_running', sa.Boolean(), nullable=False),
        sa.Column('software_used', sa.JSON(), nullable=False),
        sa.Column('problems_encountered', sa.Text()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('end_time IS NULL OR end_time >= start_time', name='time_entry_valid_range'),
    )
    op.create_index('idx_time_entries_user_start', 'time_entries', ['user_id', 'start_time'])
    op.create_index('idx_time_entries_project_start', 'time_entries', ['project_id', 'start_time'])
    op.create_index(
        'uq_time_entries_running_user', 'time_entries', ['user_id'],
        unique=True,
        sqlite_where=sa.text('is_running = 1'),
        postgresql_where=sa.text('is_running'),
    )

    op.create_table(
        'invoices',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('invoice_number', sa.String(32), nullable=False, unique=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('client_name', sa.String(255), nullable=False),
        sa.Column('from_date', sa.Date(), nullable=False),
        sa.Column('to_date', sa.Date(), nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('tax_rate', sa.Numeric(5, 2), nullable=False),
        sa.Column('tax_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('total', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', invoice_status, nullable=False),
        sa.Column('due_date', sa.Date()),
        sa.Column('paid_date', sa.Date()),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('from_date <= to_date', name='invoice_valid_period'),
        sa.CheckConstraint('tax_rate >= 0 AND tax_rate <= 100', name='invoice_tax_rate_range'),
    )
    op.create_index('idx_invoices_user_status', 'invoices', ['user_id', 'status'])
    op.create_index('idx_invoices_project', 'invoices', ['project_id'])

    op.create_table(
        'invoice_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('invoice_id', sa.String(36), sa.ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False),
        sa.Column('time_entry_id', sa.String(36), sa.ForeignKey('time_entries.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('hours', sa.Numeric(12, 6), nullable=False),
        sa.Column('rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
    )
    op.create_index('idx_invoice_items_invoice', 'invoice_items', ['invoice_id'])
    op.create_index('idx_invoice_items_time_entry', 'invoice_items', ['time_entry_id'])


def downgrade() -> None:
    op.drop_table('invoice_items')
    op.drop_table('invoices')
    op.drop_index('uq_time_entries_running_user', table_name='time_entries')
    op.drop_table('time_entries')
    op.drop_table('project_students')
    op.drop_table('projects')
    op.drop_table('students')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (invoice_status, project_status, student_level):
        enum_type.drop(bind, checkfirst=True)
