import logging
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careshift.core.exceptions import NotFoundError, StorageError
from careshift.models.care.care_plan import CarePlan
from careshift.schemas.care.care_plan_schema import CarePlanCreate

logger = logging.getLogger(__name__)


class CarePlanService:
    """Identity lookups for care plans owned by the plan-coordination system."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_plan(self, data: CarePlanCreate) -> CarePlan:
        try:
            plan = CarePlan(**data.dict())
            self.session.add(plan)
            await self.session.commit()
            await self.session.refresh(plan)
            logger.info(f"Care plan registered: {plan.id} for family {plan.family_id}")
            return plan
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating care plan: {e}")
            raise StorageError()

    async def get_plan(self, care_plan_id: int) -> CarePlan:
        result = await self.session.execute(select(CarePlan).where(CarePlan.id == care_plan_id))
        plan = result.scalar_one_or_none()
        if not plan:
            raise NotFoundError(f"Care plan with ID {care_plan_id} not found")
        return plan
