from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from careshift.core.database import get_async_session
from careshift.models.shared.enums import ShiftFilter
from careshift.services.care.shift_service import CareShiftService
from careshift.services.care.shift_generation_service import ShiftGenerationService
from careshift.schemas.care.shift_schema import (
    CoverageGenerationRequest,
    CustomShiftGenerationRequest,
    PresetRangeGenerationRequest,
    ScheduleTextGenerationRequest,
    ShiftCreate,
    ShiftGenerationResult,
    ShiftPresetResponse,
    ShiftResponse,
    ShiftUpdate,
)

router = APIRouter()

# Generation routes are declared before /{shift_id} so the path parameter never shadows them
@router.get("/presets", response_model=List[ShiftPresetResponse])
async def get_shift_presets(session: AsyncSession = Depends(get_async_session)):
    """Standard coverage presets"""
    service = ShiftGenerationService(session)
    return service.get_presets()

@router.post("/generate/custom", response_model=ShiftGenerationResult, status_code=201)
async def generate_custom_shifts(
    request: CustomShiftGenerationRequest,
    session: AsyncSession = Depends(get_async_session)
):
    """Create one open shift per definition on the next matching weekday"""
    service = ShiftGenerationService(session)
    return await service.generate_from_custom_definitions(
        request.care_plan_id, request.family_id, request.definitions
    )

@router.post("/generate/schedule-text", response_model=ShiftGenerationResult, status_code=201)
async def generate_shifts_from_text(
    request: ScheduleTextGenerationRequest,
    session: AsyncSession = Depends(get_async_session)
):
    """Parse text such as 'Monday - Friday 9 AM - 5 PM' and generate shifts from it"""
    service = ShiftGenerationService(session)
    return await service.generate_from_schedule_text(
        request.care_plan_id, request.family_id, request.schedule_text
    )

@router.post("/generate/coverage", response_model=ShiftGenerationResult, status_code=201)
async def generate_coverage_shifts(
    request: CoverageGenerationRequest,
    session: AsyncSession = Depends(get_async_session)
):
    service = ShiftGenerationService(session)
    return await service.generate_from_coverage(
        request.care_plan_id,
        request.family_id,
        weekday_coverage=request.weekday_coverage,
        weekend_coverage=request.weekend_coverage,
    )

@router.post("/generate/preset-range", response_model=ShiftGenerationResult, status_code=201)
async def generate_preset_range(
    request: PresetRangeGenerationRequest,
    session: AsyncSession = Depends(get_async_session)
):
    """One shift per day in the date range, using a standard preset"""
    service = ShiftGenerationService(session)
    return await service.generate_preset_range(
        care_plan_id=request.care_plan_id,
        family_id=request.family_id,
        preset_id=request.preset_id,
        from_date=request.from_date,
        to_date=request.to_date,
        caregiver_id=request.caregiver_id,
        location=request.location,
    )

@router.post("/", response_model=ShiftResponse, status_code=201)
async def create_shift(
    shift: ShiftCreate,
    session: AsyncSession = Depends(get_async_session)
):
    service = CareShiftService(session)
    return await service.create_shift(shift)

@router.get("/", response_model=List[ShiftResponse])
async def get_shifts(
    care_plan_id: int = Query(...),
    filter: ShiftFilter = Query(ShiftFilter.ALL),
    start_from: Optional[datetime] = Query(None),
    start_to: Optional[datetime] = Query(None),
    session: AsyncSession = Depends(get_async_session)
):
    """Shifts of a care plan ordered by start time"""
    service = CareShiftService(session)
    return await service.get_shifts(care_plan_id, filter, start_from, start_to)

@router.get("/{shift_id}", response_model=ShiftResponse)
async def get_shift(
    shift_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = CareShiftService(session)
    return await service.get_shift(shift_id)

@router.patch("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: int,
    shift: ShiftUpdate,
    session: AsyncSession = Depends(get_async_session)
):
    """Partial update; caregiver_id drives assigned/open status"""
    service = CareShiftService(session)
    return await service.update_shift(shift_id, shift)

@router.delete("/{shift_id}")
async def delete_shift(
    shift_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = CareShiftService(session)
    result = await service.delete_shift(shift_id)
    return {"message": "Shift deleted successfully", "success": result}
