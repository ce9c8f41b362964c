from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from careshift.core.database import get_async_session
from careshift.models.shared.enums import PaymentStatus
from careshift.services.care.payroll_service import PayrollService
from careshift.schemas.care.payroll_schema import PaymentProcessRequest, PayrollEntryResponse

router = APIRouter()

@router.get("/", response_model=List[PayrollEntryResponse])
async def get_payroll_entries(
    care_plan_id: int = Query(...),
    caregiver_name: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    payment_status: Optional[PaymentStatus] = Query(None),
    session: AsyncSession = Depends(get_async_session)
):
    """Payroll entries of a care plan, newest first"""
    service = PayrollService(session)
    return await service.get_entries(
        care_plan_id,
        caregiver_name=caregiver_name,
        date_from=date_from,
        date_to=date_to,
        payment_status=payment_status,
    )

@router.get("/{entry_id}", response_model=PayrollEntryResponse)
async def get_payroll_entry(
    entry_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = PayrollService(session)
    return await service.get_entry(entry_id)

@router.post("/{entry_id}/approve-payment", response_model=PayrollEntryResponse)
async def approve_payment(
    entry_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = PayrollService(session)
    return await service.approve_payment(entry_id)

@router.post("/{entry_id}/process-payment", response_model=PayrollEntryResponse)
async def process_payment(
    entry_id: int,
    data: Optional[PaymentProcessRequest] = None,
    session: AsyncSession = Depends(get_async_session)
):
    """Mark the entry paid"""
    service = PayrollService(session)
    return await service.process_payment(entry_id, data.payment_date if data else None)
