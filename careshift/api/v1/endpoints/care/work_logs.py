from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from careshift.core.database import get_async_session
from careshift.models.shared.enums import WorkLogStatus
from careshift.services.care.expense_service import ExpenseService
from careshift.services.care.work_log_service import WorkLogService
from careshift.schemas.care.expense_schema import ExpenseCreate, ExpenseResponse
from careshift.schemas.care.payroll_schema import PayrollEntryResponse
from careshift.schemas.care.work_log_schema import (
    WorkLogApprovalResponse,
    WorkLogCreate,
    WorkLogFromShift,
    WorkLogReject,
    WorkLogResponse,
    WorkLogUpdate,
)

router = APIRouter()

@router.post("/", response_model=WorkLogResponse, status_code=201)
async def create_work_log(
    work_log: WorkLogCreate,
    session: AsyncSession = Depends(get_async_session)
):
    """Report worked time"""
    service = WorkLogService(session)
    return await service.create_work_log(work_log)

@router.post("/from-shift", response_model=WorkLogResponse, status_code=201)
async def create_work_log_from_shift(
    data: WorkLogFromShift,
    session: AsyncSession = Depends(get_async_session)
):
    """Report worked time for a shift, defaulting to the shift's window"""
    service = WorkLogService(session)
    return await service.create_from_shift(data)

@router.get("/", response_model=List[WorkLogResponse])
async def get_work_logs(
    care_plan_id: int = Query(...),
    status: Optional[WorkLogStatus] = Query(None),
    care_team_member_id: Optional[int] = Query(None),
    session: AsyncSession = Depends(get_async_session)
):
    service = WorkLogService(session)
    return await service.get_work_logs(care_plan_id, status, care_team_member_id)

@router.get("/{work_log_id}", response_model=WorkLogResponse)
async def get_work_log(
    work_log_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = WorkLogService(session)
    return await service.get_work_log(work_log_id)

@router.put("/{work_log_id}", response_model=WorkLogResponse)
async def update_work_log(
    work_log_id: int,
    work_log: WorkLogUpdate,
    session: AsyncSession = Depends(get_async_session)
):
    """Correct times, break or notes while the log is pending"""
    service = WorkLogService(session)
    return await service.update_work_log(work_log_id, work_log)

@router.delete("/{work_log_id}")
async def delete_work_log(
    work_log_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = WorkLogService(session)
    result = await service.delete_work_log(work_log_id)
    return {"message": "Work log deleted successfully", "success": result}

@router.post("/{work_log_id}/approve", response_model=WorkLogApprovalResponse)
async def approve_work_log(
    work_log_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    """Approve the log and compute its payroll entry"""
    service = WorkLogService(session)
    work_log, payroll_entry = await service.approve_work_log(work_log_id)
    return WorkLogApprovalResponse(
        work_log=WorkLogResponse.model_validate(work_log),
        payroll_entry=PayrollEntryResponse.model_validate(payroll_entry),
    )

@router.post("/{work_log_id}/reject", response_model=WorkLogResponse)
async def reject_work_log(
    work_log_id: int,
    data: Optional[WorkLogReject] = None,
    session: AsyncSession = Depends(get_async_session)
):
    service = WorkLogService(session)
    return await service.reject_work_log(work_log_id, data.reason if data else None)

@router.post("/{work_log_id}/expenses", response_model=ExpenseResponse, status_code=201)
async def add_expense(
    work_log_id: int,
    expense: ExpenseCreate,
    session: AsyncSession = Depends(get_async_session)
):
    """Attach a reimbursable expense to a work log"""
    service = ExpenseService(session)
    return await service.add_expense(work_log_id, expense)

@router.get("/{work_log_id}/expenses", response_model=List[ExpenseResponse])
async def get_expenses(
    work_log_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    await WorkLogService(session).get_work_log(work_log_id)
    service = ExpenseService(session)
    return await service.get_expenses(work_log_id)
