import pytest
from datetime import datetime

from careshift.core.exceptions import ConflictError, NotFoundError, ValidationError
from careshift.models.care.work_log import WorkLog
from careshift.models.shared.enums import ShiftFilter, ShiftStatus, WorkLogStatus
from careshift.schemas.care.shift_schema import ShiftCreate, ShiftUpdate
from careshift.services.care.shift_service import CareShiftService, derive_shift_status


def shift_payload(care_plan, **overrides):
    data = {
        "care_plan_id": care_plan.id,
        "family_id": care_plan.family_id,
        "title": "Evening shift",
        "start_time": datetime(2026, 10, 20, 16, 0),
        "end_time": datetime(2026, 10, 21, 6, 0),
    }
    data.update(overrides)
    return ShiftCreate(**data)


class TestDeriveShiftStatus:
    def test_caregiver_reference_drives_status(self):
        assert derive_shift_status(None) == ShiftStatus.OPEN
        assert derive_shift_status(501) == ShiftStatus.ASSIGNED

    def test_terminal_status_wins(self):
        assert derive_shift_status(501, ShiftStatus.COMPLETED) == ShiftStatus.COMPLETED
        assert derive_shift_status(None, ShiftStatus.CANCELLED) == ShiftStatus.CANCELLED

    def test_inconsistent_requests(self):
        with pytest.raises(ValidationError):
            derive_shift_status(None, ShiftStatus.ASSIGNED)
        with pytest.raises(ValidationError):
            derive_shift_status(501, ShiftStatus.OPEN)


@pytest.mark.asyncio
class TestShiftLifecycle:
    """Assignment, closing and deletion of single shifts"""

    async def test_create_open_and_assigned(self, session, care_plan, caregiver):
        service = CareShiftService(session)

        open_shift = await service.create_shift(shift_payload(care_plan))
        assigned = await service.create_shift(shift_payload(care_plan, caregiver_id=caregiver.caregiver_id))

        assert open_shift.status == ShiftStatus.OPEN
        assert assigned.status == ShiftStatus.ASSIGNED

    async def test_assign_is_idempotent_and_clearing_reopens(self, session, care_plan, caregiver):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan))

        for _ in range(2):
            shift = await service.update_shift(shift.id, ShiftUpdate(caregiver_id=caregiver.caregiver_id))
            assert shift.status == ShiftStatus.ASSIGNED
            assert shift.caregiver_id == 501

        shift = await service.update_shift(shift.id, ShiftUpdate(caregiver_id=None))
        assert shift.status == ShiftStatus.OPEN
        assert shift.caregiver_id is None

    async def test_updating_other_fields_keeps_status(self, session, care_plan, caregiver):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan, caregiver_id=caregiver.caregiver_id))

        shift = await service.update_shift(shift.id, ShiftUpdate(location="Ground floor", title="Late shift"))

        assert shift.status == ShiftStatus.ASSIGNED
        assert shift.location == "Ground floor"
        assert shift.title == "Late shift"

    async def test_completed_shift_cannot_be_reassigned(self, session, care_plan, caregiver):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan, caregiver_id=caregiver.caregiver_id))

        shift = await service.update_shift(shift.id, ShiftUpdate(status=ShiftStatus.COMPLETED))
        assert shift.status == ShiftStatus.COMPLETED

        with pytest.raises(ConflictError):
            await service.update_shift(shift.id, ShiftUpdate(caregiver_id=None))
        with pytest.raises(ConflictError):
            await service.update_shift(shift.id, ShiftUpdate(status=ShiftStatus.CANCELLED))

    async def test_cancelled_shift_allows_description_edits(self, session, care_plan):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan))
        shift = await service.update_shift(shift.id, ShiftUpdate(status=ShiftStatus.CANCELLED))

        shift = await service.update_shift(shift.id, ShiftUpdate(description="Family covered this one"))

        assert shift.status == ShiftStatus.CANCELLED
        assert shift.description == "Family covered this one"

    async def test_assignment_targets_must_be_active_members(self, session, care_plan, inactive_caregiver):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan))

        with pytest.raises(ConflictError):
            await service.update_shift(shift.id, ShiftUpdate(caregiver_id=inactive_caregiver.caregiver_id))
        with pytest.raises(NotFoundError):
            await service.update_shift(shift.id, ShiftUpdate(caregiver_id=999))
        with pytest.raises(NotFoundError):
            await service.create_shift(shift_payload(care_plan, caregiver_id=999))

    async def test_assigned_status_without_caregiver(self, session, care_plan):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan))
        with pytest.raises(ValidationError):
            await service.update_shift(shift.id, ShiftUpdate(status=ShiftStatus.ASSIGNED))

    async def test_end_must_follow_start(self, session, care_plan):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan))
        with pytest.raises(ValidationError):
            await service.update_shift(shift.id, ShiftUpdate(end_time=datetime(2026, 10, 20, 15, 0)))

    async def test_filters_and_ordering(self, session, care_plan, caregiver):
        service = CareShiftService(session)
        later = await service.create_shift(shift_payload(
            care_plan, start_time=datetime(2026, 10, 22, 8, 0), end_time=datetime(2026, 10, 22, 16, 0)
        ))
        earlier = await service.create_shift(shift_payload(care_plan, caregiver_id=caregiver.caregiver_id))

        all_shifts = await service.get_shifts(care_plan.id)
        assert [s.id for s in all_shifts] == [earlier.id, later.id]
        assert [s.id for s in await service.get_shifts(care_plan.id, ShiftFilter.ASSIGNED)] == [earlier.id]
        assert [s.id for s in await service.get_shifts(care_plan.id, ShiftFilter.UNASSIGNED)] == [later.id]
        assert await service.get_shifts(care_plan.id, ShiftFilter.COMPLETED) == []
        ranged = await service.get_shifts(care_plan.id, start_from=datetime(2026, 10, 21, 0, 0))
        assert [s.id for s in ranged] == [later.id]

    async def test_delete_is_refused_while_work_logs_exist(self, session, care_plan, caregiver, assigned_shift):
        service = CareShiftService(session)
        session.add(WorkLog(
            care_team_member_id=caregiver.id,
            care_plan_id=care_plan.id,
            shift_id=assigned_shift.id,
            start_time=assigned_shift.start_time,
            end_time=assigned_shift.end_time,
            status=WorkLogStatus.PENDING,
        ))
        await session.commit()

        with pytest.raises(ConflictError):
            await service.delete_shift(assigned_shift.id)
        assert (await service.get_shift(assigned_shift.id)).id == assigned_shift.id

    async def test_delete(self, session, care_plan):
        service = CareShiftService(session)
        shift = await service.create_shift(shift_payload(care_plan))

        assert await service.delete_shift(shift.id) is True
        with pytest.raises(NotFoundError):
            await service.get_shift(shift.id)
