import logging
from typing import List, Optional
from datetime import datetime
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careshift.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from careshift.models.care.care_shift import CareShift
from careshift.models.care.work_log import WorkLog
from careshift.models.shared.enums import ShiftFilter, ShiftStatus
from careshift.schemas.care.shift_schema import ShiftCreate, ShiftUpdate
from careshift.services.care.care_plan_service import CarePlanService
from careshift.services.care.care_team_service import CareTeamService

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = {ShiftStatus.COMPLETED, ShiftStatus.CANCELLED}


def derive_shift_status(caregiver_id: Optional[int], requested_status: Optional[ShiftStatus] = None) -> ShiftStatus:
    """
    Status follows the caregiver reference unless the caller closes the shift.
    completed/cancelled always win; open/assigned must agree with the caregiver.
    """
    if requested_status in TERMINAL_STATUSES:
        return requested_status
    if requested_status == ShiftStatus.ASSIGNED and caregiver_id is None:
        raise ValidationError("A shift cannot be assigned without a caregiver")
    if requested_status == ShiftStatus.OPEN and caregiver_id is not None:
        raise ValidationError("A shift with a caregiver cannot be open; clear caregiver_id instead")
    return ShiftStatus.ASSIGNED if caregiver_id is not None else ShiftStatus.OPEN


class CareShiftService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.plan_service = CarePlanService(session)
        self.team_service = CareTeamService(session)

    async def create_shift(self, data: ShiftCreate) -> CareShift:
        await self.plan_service.get_plan(data.care_plan_id)
        if data.caregiver_id is not None:
            await self.team_service.require_active_member(data.care_plan_id, data.caregiver_id)

        try:
            shift = CareShift(**data.dict(), status=derive_shift_status(data.caregiver_id))
            self.session.add(shift)
            await self.session.commit()
            await self.session.refresh(shift)

            logger.info(f"Care shift created: {shift.id} '{shift.title}' for care plan {shift.care_plan_id}")
            return shift

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating care shift: {e}")
            raise StorageError()

    async def get_shift(self, shift_id: int) -> CareShift:
        result = await self.session.execute(select(CareShift).where(CareShift.id == shift_id))
        shift = result.scalar_one_or_none()
        if not shift:
            raise NotFoundError(f"Care shift with ID {shift_id} not found")
        return shift

    async def get_shifts(
        self,
        care_plan_id: int,
        shift_filter: ShiftFilter = ShiftFilter.ALL,
        start_from: Optional[datetime] = None,
        start_to: Optional[datetime] = None,
    ) -> List[CareShift]:
        """Shifts of a care plan ordered by start time, narrowed by assignment state"""
        conditions = [CareShift.care_plan_id == care_plan_id]

        if shift_filter == ShiftFilter.ASSIGNED:
            conditions.append(CareShift.status == ShiftStatus.ASSIGNED)
        elif shift_filter == ShiftFilter.UNASSIGNED:
            conditions.append(CareShift.status == ShiftStatus.OPEN)
        elif shift_filter == ShiftFilter.COMPLETED:
            conditions.append(CareShift.status == ShiftStatus.COMPLETED)

        if start_from is not None:
            conditions.append(CareShift.start_time >= start_from)
        if start_to is not None:
            conditions.append(CareShift.start_time <= start_to)

        result = await self.session.scalars(
            select(CareShift).where(*conditions).order_by(CareShift.start_time.asc(), CareShift.id.asc())
        )
        return list(result.all())

    async def update_shift(self, shift_id: int, data: ShiftUpdate) -> CareShift:
        shift = await self.get_shift(shift_id)

        update_data = data.dict(exclude_unset=True)
        requested_status = update_data.pop("status", None)
        caregiver_changed = "caregiver_id" in update_data
        status_changed = requested_status is not None and requested_status != shift.status

        if shift.status in TERMINAL_STATUSES and (caregiver_changed or status_changed):
            raise ConflictError(f"Shift {shift_id} is {shift.status.value} and can no longer be reassigned")

        new_caregiver_id = update_data.get("caregiver_id", shift.caregiver_id)
        if caregiver_changed and new_caregiver_id is not None:
            await self.team_service.require_active_member(shift.care_plan_id, new_caregiver_id)

        new_start = update_data.get("start_time", shift.start_time)
        new_end = update_data.get("end_time", shift.end_time)
        if new_end <= new_start:
            raise ValidationError("end_time must be after start_time")

        if caregiver_changed or status_changed:
            new_status = derive_shift_status(new_caregiver_id, requested_status)
        else:
            new_status = shift.status

        try:
            for field, value in update_data.items():
                setattr(shift, field, value)
            shift.status = new_status

            await self.session.commit()
            await self.session.refresh(shift)

            logger.info(f"Care shift updated: {shift.id} status={shift.status.value} caregiver={shift.caregiver_id}")
            return shift

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating care shift {shift_id}: {e}")
            raise StorageError()

    async def delete_shift(self, shift_id: int) -> bool:
        """Hard delete. Refused while any work log still points at the shift."""
        shift = await self.get_shift(shift_id)

        dependent_logs = await self.session.scalar(
            select(func.count(WorkLog.id)).where(WorkLog.shift_id == shift_id)
        )
        if dependent_logs:
            raise ConflictError(
                f"Shift {shift_id} has {dependent_logs} work log(s); delete or reassign them first"
            )

        try:
            await self.session.delete(shift)
            await self.session.commit()
            logger.info(f"Care shift deleted: {shift_id}")
            return True
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting care shift {shift_id}: {e}")
            raise StorageError()
