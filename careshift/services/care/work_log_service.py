import logging
from typing import List, Optional, Tuple
from datetime import datetime
from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careshift.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from careshift.models.care.payroll_entry import PayrollEntry
from careshift.models.care.work_log import WorkLog
from careshift.models.care.work_log_expense import WorkLogExpense
from careshift.models.shared.enums import ShiftStatus, WorkLogStatus
from careshift.schemas.care.work_log_schema import WorkLogCreate, WorkLogFromShift, WorkLogUpdate
from careshift.services.care.care_plan_service import CarePlanService
from careshift.services.care.care_team_service import CareTeamService
from careshift.services.care.payroll_calculator import PayrollCalculator
from careshift.services.care.payroll_service import PayrollService
from careshift.services.care.shift_service import CareShiftService

logger = logging.getLogger(__name__)

LOGGABLE_SHIFT_STATUSES = {ShiftStatus.ASSIGNED, ShiftStatus.COMPLETED}


def validate_work_window(start_time: datetime, end_time: datetime, break_minutes: int) -> None:
    if end_time <= start_time:
        raise ValidationError("end_time must be after start_time")
    if break_minutes < 0:
        raise ValidationError("break_minutes cannot be negative")
    if break_minutes * 60 > (end_time - start_time).total_seconds():
        raise ValidationError("Break cannot be longer than the time worked")


def append_rejection_reason(notes: Optional[str], reason: Optional[str]) -> Optional[str]:
    if not reason or not reason.strip():
        return notes
    line = f"Rejected: {reason.strip()}"
    return f"{notes}\n{line}" if notes else line


class WorkLogService:
    """
    Worked time reported by caregivers. Approval is the only way a payroll
    entry comes into existence, and both are committed together.
    """

    def __init__(self, session: AsyncSession, calculator: Optional[PayrollCalculator] = None):
        self.session = session
        self.plan_service = CarePlanService(session)
        self.team_service = CareTeamService(session)
        self.shift_service = CareShiftService(session)
        self.payroll_service = PayrollService(session, calculator)

    async def _save_new(self, work_log: WorkLog) -> WorkLog:
        try:
            self.session.add(work_log)
            await self.session.commit()
            await self.session.refresh(work_log)
            logger.info(
                f"Work log created: {work_log.id} for member {work_log.care_team_member_id} "
                f"({work_log.start_time} - {work_log.end_time})"
            )
            return work_log
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating work log: {e}")
            raise StorageError()

    async def create_work_log(self, data: WorkLogCreate) -> WorkLog:
        await self.plan_service.get_plan(data.care_plan_id)
        member = await self.team_service.get_member(data.care_team_member_id)
        if member.care_plan_id != data.care_plan_id:
            raise ValidationError(
                f"Care team member {member.id} does not belong to care plan {data.care_plan_id}"
            )

        if data.shift_id is not None:
            shift = await self.shift_service.get_shift(data.shift_id)
            if shift.care_plan_id != data.care_plan_id:
                raise ValidationError(f"Shift {shift.id} does not belong to care plan {data.care_plan_id}")

        validate_work_window(data.start_time, data.end_time, data.break_minutes)

        return await self._save_new(WorkLog(**data.dict(), status=WorkLogStatus.PENDING))

    async def create_from_shift(self, data: WorkLogFromShift) -> WorkLog:
        """Copy plan, window and caregiver from a shift; explicit times override the shift's."""
        shift = await self.shift_service.get_shift(data.shift_id)
        if shift.status not in LOGGABLE_SHIFT_STATUSES:
            raise ConflictError(
                f"Shift {shift.id} is {shift.status.value}; work can only be logged against assigned or completed shifts"
            )
        if shift.caregiver_id is None:
            raise ConflictError(f"Shift {shift.id} has no caregiver")

        member = await self.team_service.find_member_for_caregiver(shift.care_plan_id, shift.caregiver_id)
        if not member:
            raise NotFoundError(
                f"Caregiver {shift.caregiver_id} is not on the team for care plan {shift.care_plan_id}"
            )

        start_time = data.start_time or shift.start_time
        end_time = data.end_time or shift.end_time
        validate_work_window(start_time, end_time, data.break_minutes)

        work_log = WorkLog(
            care_team_member_id=member.id,
            care_plan_id=shift.care_plan_id,
            shift_id=shift.id,
            start_time=start_time,
            end_time=end_time,
            break_minutes=data.break_minutes,
            notes=data.notes,
            base_rate=data.base_rate,
            rate_multiplier=data.rate_multiplier,
            status=WorkLogStatus.PENDING,
        )
        return await self._save_new(work_log)

    async def get_work_log(self, work_log_id: int) -> WorkLog:
        result = await self.session.execute(select(WorkLog).where(WorkLog.id == work_log_id))
        work_log = result.scalar_one_or_none()
        if not work_log:
            raise NotFoundError(f"Work log with ID {work_log_id} not found")
        return work_log

    async def get_work_logs(
        self,
        care_plan_id: int,
        status: Optional[WorkLogStatus] = None,
        care_team_member_id: Optional[int] = None,
    ) -> List[WorkLog]:
        conditions = [WorkLog.care_plan_id == care_plan_id]
        if status is not None:
            conditions.append(WorkLog.status == status)
        if care_team_member_id is not None:
            conditions.append(WorkLog.care_team_member_id == care_team_member_id)

        result = await self.session.scalars(
            select(WorkLog).where(*conditions).order_by(WorkLog.start_time.desc(), WorkLog.id.desc())
        )
        return list(result.all())

    async def _get_pending(self, work_log_id: int, action: str, lock: bool = False) -> WorkLog:
        query = select(WorkLog).where(WorkLog.id == work_log_id)
        if lock:
            query = query.with_for_update()
        result = await self.session.execute(query)
        work_log = result.scalar_one_or_none()
        if not work_log:
            raise NotFoundError(f"Work log with ID {work_log_id} not found")
        if work_log.status != WorkLogStatus.PENDING:
            raise ConflictError(f"Cannot {action} work log {work_log_id}: it is already {work_log.status.value}")
        return work_log

    async def update_work_log(self, work_log_id: int, data: WorkLogUpdate) -> WorkLog:
        work_log = await self._get_pending(work_log_id, "update")
        update_data = data.dict(exclude_unset=True)

        validate_work_window(
            update_data.get("start_time") or work_log.start_time,
            update_data.get("end_time") or work_log.end_time,
            update_data.get("break_minutes", work_log.break_minutes) or 0,
        )

        try:
            for field, value in update_data.items():
                setattr(work_log, field, value)
            await self.session.commit()
            await self.session.refresh(work_log)
            logger.info(f"Work log updated: {work_log_id}")
            return work_log
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating work log {work_log_id}: {e}")
            raise StorageError()

    async def delete_work_log(self, work_log_id: int) -> bool:
        """Pending logs only; their expenses go with them."""
        work_log = await self._get_pending(work_log_id, "delete")
        try:
            await self.session.execute(delete(WorkLogExpense).where(WorkLogExpense.work_log_id == work_log_id))
            await self.session.delete(work_log)
            await self.session.commit()
            logger.info(f"Work log deleted: {work_log_id}")
            return True
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting work log {work_log_id}: {e}")
            raise StorageError()

    async def approve_work_log(self, work_log_id: int) -> Tuple[WorkLog, PayrollEntry]:
        """
        Approve a pending work log and create its payroll entry.

        The status change and the payroll entry share one transaction: readers
        either see both or neither. Any failure rolls back and the log stays pending.
        """
        try:
            work_log = await self._get_pending(work_log_id, "approve", lock=True)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error locking work log {work_log_id} for approval: {e}")
            raise StorageError()

        try:
            work_log.status = WorkLogStatus.APPROVED
            entry = await self.payroll_service.build_entry(work_log)
            await self.session.commit()
        except HTTPException:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Work log {work_log_id} was approved concurrently: {e}")
            raise ConflictError(f"Payroll entry already exists for work log {work_log_id}")
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error approving work log {work_log_id}, nothing was saved: {e}")
            raise StorageError()

        await self.session.refresh(work_log)
        entry = await self.payroll_service.get_entry(entry.id)

        logger.info(
            f"Work log {work_log_id} approved | Payroll entry {entry.id} | Total: {entry.total_amount}"
        )
        return work_log, entry

    async def reject_work_log(self, work_log_id: int, reason: Optional[str] = None) -> WorkLog:
        try:
            work_log = await self._get_pending(work_log_id, "reject", lock=True)
            work_log.status = WorkLogStatus.REJECTED
            work_log.notes = append_rejection_reason(work_log.notes, reason)
            await self.session.commit()
            await self.session.refresh(work_log)
            logger.info(f"Work log {work_log_id} rejected" + (f": {reason}" if reason else ""))
            return work_log
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error rejecting work log {work_log_id}: {e}")
            raise StorageError()
