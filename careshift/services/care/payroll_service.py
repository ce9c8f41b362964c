import logging
from typing import List, Optional
from datetime import date, datetime, time, timedelta
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careshift.core.exceptions import ConflictError, NotFoundError, StorageError
from careshift.models.care.care_team_member import CareTeamMember
from careshift.models.care.payroll_entry import PayrollEntry
from careshift.models.care.work_log import WorkLog
from careshift.models.shared.enums import PaymentStatus
from careshift.services.care.care_team_service import CareTeamService
from careshift.services.care.expense_service import ExpenseService
from careshift.services.care.holiday_service import HolidayService
from careshift.services.care.payroll_calculator import PayrollCalculator

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(self, session: AsyncSession, calculator: Optional[PayrollCalculator] = None):
        self.session = session
        self.calculator = calculator or PayrollCalculator()
        self.team_service = CareTeamService(session)
        self.expense_service = ExpenseService(session)
        self.holiday_service = HolidayService(session)

    async def _existing_entry_id(self, work_log_id: int) -> Optional[int]:
        return await self.session.scalar(
            select(PayrollEntry.id).where(PayrollEntry.work_log_id == work_log_id)
        )

    async def build_entry(self, work_log: WorkLog) -> PayrollEntry:
        """
        Compute the payroll entry for an approved work log and add it to the
        session. The caller owns the commit so approval and payroll land together.
        """
        if await self._existing_entry_id(work_log.id) is not None:
            raise ConflictError(f"Payroll entry already exists for work log {work_log.id}")

        member = await self.team_service.get_member(work_log.care_team_member_id)
        holiday = await self.holiday_service.get_holiday_for_date(work_log.start_time.date())
        expenses = await self.expense_service.get_expenses(work_log.id)

        computed = self.calculator.calculate(work_log, member, holiday, expenses)

        entry = PayrollEntry(
            work_log_id=work_log.id,
            care_team_member_id=work_log.care_team_member_id,
            care_plan_id=work_log.care_plan_id,
            regular_hours=computed.regular_hours,
            overtime_hours=computed.overtime_hours,
            holiday_hours=computed.holiday_hours,
            regular_rate=computed.regular_rate,
            overtime_rate=computed.overtime_rate,
            holiday_rate=computed.holiday_rate,
            expense_total=computed.expense_total,
            total_amount=computed.total_amount,
            payment_status=PaymentStatus.PENDING,
            pay_period_start=computed.pay_period_start,
            pay_period_end=computed.pay_period_end,
        )
        self.session.add(entry)
        await self.session.flush()

        logger.info(
            f"Payroll computed for work log {work_log.id} | "
            f"Regular: {computed.regular_hours}h @ {computed.regular_rate} | "
            f"Overtime: {computed.overtime_hours}h @ {computed.overtime_rate} | "
            f"Holiday: {computed.holiday_hours}h @ {computed.holiday_rate} | "
            f"Expenses: {computed.expense_total} | Total: {computed.total_amount}"
        )
        return entry

    async def get_entry(self, entry_id: int) -> PayrollEntry:
        result = await self.session.execute(
            select(PayrollEntry)
            .options(selectinload(PayrollEntry.care_team_member))
            .where(PayrollEntry.id == entry_id)
        )
        entry = result.scalar_one_or_none()
        if not entry:
            raise NotFoundError(f"Payroll entry with ID {entry_id} not found")
        return entry

    async def get_entries(
        self,
        care_plan_id: int,
        caregiver_name: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> List[PayrollEntry]:
        """Payroll entries of a care plan, newest first"""
        conditions = [PayrollEntry.care_plan_id == care_plan_id]

        if caregiver_name:
            conditions.append(CareTeamMember.display_name.ilike(f"%{caregiver_name.strip()}%"))
        if payment_status is not None:
            conditions.append(PayrollEntry.payment_status == payment_status)
        if date_from is not None:
            conditions.append(PayrollEntry.created_at >= datetime.combine(date_from, time.min))
        if date_to is not None:
            # Inclusive end date
            conditions.append(PayrollEntry.created_at < datetime.combine(date_to + timedelta(days=1), time.min))

        result = await self.session.scalars(
            select(PayrollEntry)
            .join(CareTeamMember, PayrollEntry.care_team_member_id == CareTeamMember.id)
            .options(selectinload(PayrollEntry.care_team_member))
            .where(*conditions)
            .order_by(PayrollEntry.created_at.desc(), PayrollEntry.id.desc())
        )
        return list(result.all())

    async def approve_payment(self, entry_id: int) -> PayrollEntry:
        entry = await self.get_entry(entry_id)
        if entry.payment_status != PaymentStatus.PENDING:
            raise ConflictError(
                f"Payroll entry {entry_id} is {entry.payment_status.value}; only pending entries can be approved"
            )

        try:
            entry.payment_status = PaymentStatus.APPROVED
            await self.session.commit()
            await self.session.refresh(entry)
            logger.info(f"Payroll entry {entry_id} approved for payment")
            return await self.get_entry(entry_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error approving payroll entry {entry_id}: {e}")
            raise StorageError()

    async def process_payment(self, entry_id: int, payment_date: Optional[datetime] = None) -> PayrollEntry:
        """Mark an entry paid. Paid entries are final."""
        entry = await self.get_entry(entry_id)
        if entry.payment_status == PaymentStatus.PAID:
            raise ConflictError(f"Payroll entry {entry_id} has already been paid")

        try:
            entry.payment_status = PaymentStatus.PAID
            entry.payment_date = payment_date or datetime.now()
            await self.session.commit()
            await self.session.refresh(entry)
            logger.info(f"Payment processed for payroll entry {entry_id} on {entry.payment_date}")
            return await self.get_entry(entry_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error processing payment for payroll entry {entry_id}: {e}")
            raise StorageError()
