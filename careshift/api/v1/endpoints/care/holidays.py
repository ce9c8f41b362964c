from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from careshift.core.database import get_async_session
from careshift.schemas.common.pagination import PaginatedResponse
from careshift.services.care.holiday_service import HolidayService
from careshift.schemas.care.holiday_schema import HolidayCreate, HolidayUpdate, HolidayResponse

router = APIRouter()

@router.post("/", response_model=HolidayResponse, status_code=201)
async def create_holiday(
    holiday: HolidayCreate,
    session: AsyncSession = Depends(get_async_session)
):
    """Create a new holiday"""
    service = HolidayService(session)
    return await service.create_holiday(holiday)

@router.get("/", response_model=PaginatedResponse[HolidayResponse])
async def get_holidays(
    page_index: int = Query(1, ge=1),
    page_size: int = Query(100, ge=1, le=1000),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12, description="Only used together with year"),
    is_active: Optional[bool] = Query(None),
    session: AsyncSession = Depends(get_async_session)
):
    """Get holidays with filtering and pagination"""
    service = HolidayService(session)
    return await service.get_holidays(
        page_index=page_index,
        page_size=page_size,
        year=year,
        month=month,
        is_active=is_active
    )

@router.get("/{holiday_id}", response_model=HolidayResponse)
async def get_holiday(
    holiday_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = HolidayService(session)
    return await service.get_holiday(holiday_id)

@router.put("/{holiday_id}", response_model=HolidayResponse)
async def update_holiday(
    holiday_id: int,
    holiday: HolidayUpdate,
    session: AsyncSession = Depends(get_async_session)
):
    """Update holiday"""
    service = HolidayService(session)
    return await service.update_holiday(holiday_id, holiday)

@router.delete("/{holiday_id}")
async def delete_holiday(
    holiday_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    """Delete holiday"""
    service = HolidayService(session)
    result = await service.delete_holiday(holiday_id)
    return {"message": "Holiday deleted successfully", "success": result}
