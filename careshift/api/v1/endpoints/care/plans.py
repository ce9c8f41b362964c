from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from careshift.core.database import get_async_session
from careshift.services.care.care_plan_service import CarePlanService
from careshift.schemas.care.care_plan_schema import CarePlanCreate, CarePlanResponse

router = APIRouter()

@router.post("/", response_model=CarePlanResponse, status_code=201)
async def create_care_plan(
    plan: CarePlanCreate,
    session: AsyncSession = Depends(get_async_session)
):
    """Register a care plan"""
    service = CarePlanService(session)
    return await service.create_plan(plan)

@router.get("/{care_plan_id}", response_model=CarePlanResponse)
async def get_care_plan(
    care_plan_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = CarePlanService(session)
    return await service.get_plan(care_plan_id)
