"""initial care scheduling and payroll schema

Revision ID: 3c9a1f6d2b7e
Revises:
Create Date: 2026-10-18 09:12:44.118203
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '3c9a1f6d2b7e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum columns store member names, matching SQLAlchemy's default for Python enums
team_member_status = sa.Enum('ACTIVE', 'INACTIVE', name='teammemberstatus')
shift_status = sa.Enum('OPEN', 'ASSIGNED', 'COMPLETED', 'CANCELLED', name='shiftstatus')
work_log_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='worklogstatus')
expense_category = sa.Enum('MEDICAL_SUPPLIES', 'FOOD', 'TRANSPORTATION', 'OTHER', name='expensecategory')
expense_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='expensestatus')
payment_status = sa.Enum('PENDING', 'APPROVED', 'PAID', name='paymentstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'care_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('family_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_care_plans_id', 'care_plans', ['id'])
    op.create_index('ix_care_plans_family_id', 'care_plans', ['family_id'])

    op.create_table(
        'care_team_members',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('care_plan_id', sa.Integer(), sa.ForeignKey('care_plans.id'), nullable=False),
        sa.Column('caregiver_id', sa.Integer(), nullable=False),
        sa.Column('display_name', sa.String(length=150), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=True),
        sa.Column('status', team_member_status, nullable=False),
        sa.Column('regular_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('overtime_rate', sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('care_plan_id', 'caregiver_id', name='uq_care_team_members_plan_caregiver'),
    )
    op.create_index('ix_care_team_members_id', 'care_team_members', ['id'])
    op.create_index('ix_care_team_members_care_plan_id', 'care_team_members', ['care_plan_id'])
    op.create_index('ix_care_team_members_caregiver_id', 'care_team_members', ['caregiver_id'])

    op.create_table(
        'care_shifts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('care_plan_id', sa.Integer(), sa.ForeignKey('care_plans.id'), nullable=False),
        sa.Column('family_id', sa.Integer(), nullable=False),
        sa.Column('caregiver_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('status', shift_status, nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('recurring_pattern', sa.String(length=100), nullable=True),
        sa.Column('google_calendar_event_id', sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_care_shifts_id', 'care_shifts', ['id'])
    op.create_index('ix_care_shifts_care_plan_id', 'care_shifts', ['care_plan_id'])
    op.create_index('ix_care_shifts_caregiver_id', 'care_shifts', ['caregiver_id'])
    op.create_index('ix_care_shifts_start_time', 'care_shifts', ['start_time'])

    op.create_table(
        'work_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('care_team_member_id', sa.Integer(), sa.ForeignKey('care_team_members.id'), nullable=False),
        sa.Column('care_plan_id', sa.Integer(), sa.ForeignKey('care_plans.id'), nullable=False),
        sa.Column('shift_id', sa.Integer(), sa.ForeignKey('care_shifts.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('break_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('base_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('rate_multiplier', sa.Numeric(4, 2), nullable=True),
        sa.Column('status', work_log_status, nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_work_logs_id', 'work_logs', ['id'])
    op.create_index('ix_work_logs_care_team_member_id', 'work_logs', ['care_team_member_id'])
    op.create_index('ix_work_logs_care_plan_id', 'work_logs', ['care_plan_id'])
    op.create_index('ix_work_logs_shift_id', 'work_logs', ['shift_id'])

    op.create_table(
        'work_log_expenses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('work_log_id', sa.Integer(), sa.ForeignKey('work_logs.id'), nullable=False),
        sa.Column('category', expense_category, nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('receipt_url', sa.String(length=500), nullable=True),
        sa.Column('status', expense_status, nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_work_log_expenses_id', 'work_log_expenses', ['id'])
    op.create_index('ix_work_log_expenses_work_log_id', 'work_log_expenses', ['work_log_id'])

    op.create_table(
        'holidays',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('pay_multiplier', sa.Numeric(4, 2), nullable=False, server_default='1'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_holidays_id', 'holidays', ['id'])
    op.create_index('ix_holidays_date', 'holidays', ['date'])

    op.create_table(
        'payroll_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('work_log_id', sa.Integer(), sa.ForeignKey('work_logs.id'), nullable=False, unique=True),
        sa.Column('care_team_member_id', sa.Integer(), sa.ForeignKey('care_team_members.id'), nullable=False),
        sa.Column('care_plan_id', sa.Integer(), sa.ForeignKey('care_plans.id'), nullable=False),
        sa.Column('regular_hours', sa.Numeric(6, 2), nullable=False),
        sa.Column('overtime_hours', sa.Numeric(6, 2), nullable=True),
        sa.Column('holiday_hours', sa.Numeric(6, 2), nullable=True),
        sa.Column('regular_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('overtime_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('holiday_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('expense_total', sa.Numeric(10, 2), nullable=True),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_status', payment_status, nullable=False),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('pay_period_start', sa.DateTime(), nullable=True),
        sa.Column('pay_period_end', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_payroll_entries_id', 'payroll_entries', ['id'])
    op.create_index('ix_payroll_entries_care_team_member_id', 'payroll_entries', ['care_team_member_id'])
    op.create_index('ix_payroll_entries_care_plan_id', 'payroll_entries', ['care_plan_id'])
    print("✓ [3c9a1f6d2b7e] Created care scheduling and payroll tables")


def downgrade() -> None:
    op.drop_table('payroll_entries')
    op.drop_table('holidays')
    op.drop_table('work_log_expenses')
    op.drop_table('work_logs')
    op.drop_table('care_shifts')
    op.drop_table('care_team_members')
    op.drop_table('care_plans')

    bind = op.get_bind()
    for enum in (payment_status, expense_status, expense_category, work_log_status, shift_status, team_member_status):
        enum.drop(bind, checkfirst=True)
