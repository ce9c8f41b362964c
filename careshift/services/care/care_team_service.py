import logging
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careshift.core.exceptions import ConflictError, NotFoundError, StorageError
from careshift.models.care.care_team_member import CareTeamMember
from careshift.models.shared.enums import TeamMemberStatus
from careshift.schemas.care.team_member_schema import CareTeamMemberCreate, CareTeamMemberUpdate
from careshift.services.care.care_plan_service import CarePlanService

logger = logging.getLogger(__name__)


class CareTeamService:
    """
    Roster of caregivers per care plan. Membership is managed by plan
    coordination; scheduling and payroll only read rates and status.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.plan_service = CarePlanService(session)

    async def add_member(self, data: CareTeamMemberCreate) -> CareTeamMember:
        await self.plan_service.get_plan(data.care_plan_id)
        try:
            member = CareTeamMember(**data.dict(), status=TeamMemberStatus.ACTIVE)
            self.session.add(member)
            await self.session.commit()
            await self.session.refresh(member)
            logger.info(f"Caregiver {member.caregiver_id} added to care plan {member.care_plan_id}")
            return member
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(f"Caregiver {data.caregiver_id} is already on care plan {data.care_plan_id}")
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error adding team member: {e}")
            raise StorageError()

    async def update_member(self, member_id: int, data: CareTeamMemberUpdate) -> CareTeamMember:
        member = await self.get_member(member_id)
        try:
            for field, value in data.dict(exclude_unset=True).items():
                setattr(member, field, value)
            await self.session.commit()
            await self.session.refresh(member)
            logger.info(f"Team member {member_id} updated")
            return member
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating team member {member_id}: {e}")
            raise StorageError()

    async def get_member(self, member_id: int) -> CareTeamMember:
        result = await self.session.execute(select(CareTeamMember).where(CareTeamMember.id == member_id))
        member = result.scalar_one_or_none()
        if not member:
            raise NotFoundError(f"Care team member with ID {member_id} not found")
        return member

    async def get_members(self, care_plan_id: int, status: Optional[TeamMemberStatus] = None) -> List[CareTeamMember]:
        conditions = [CareTeamMember.care_plan_id == care_plan_id]
        if status is not None:
            conditions.append(CareTeamMember.status == status)
        result = await self.session.scalars(
            select(CareTeamMember).where(*conditions).order_by(CareTeamMember.id)
        )
        return list(result.all())

    async def find_member_for_caregiver(self, care_plan_id: int, caregiver_id: int) -> Optional[CareTeamMember]:
        result = await self.session.execute(
            select(CareTeamMember).where(
                CareTeamMember.care_plan_id == care_plan_id,
                CareTeamMember.caregiver_id == caregiver_id,
            )
        )
        return result.scalar_one_or_none()

    async def require_active_member(self, care_plan_id: int, caregiver_id: int) -> CareTeamMember:
        """Assignment target check: caregiver must be an active member of the plan."""
        member = await self.find_member_for_caregiver(care_plan_id, caregiver_id)
        if not member:
            raise NotFoundError(f"Caregiver {caregiver_id} is not on the team for care plan {care_plan_id}")
        if not member.is_active:
            raise ConflictError(f"Caregiver {caregiver_id} is not an active member of care plan {care_plan_id}")
        return member
