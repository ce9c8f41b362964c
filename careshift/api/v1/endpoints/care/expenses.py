from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from careshift.core.database import get_async_session
from careshift.services.care.expense_service import ExpenseService
from careshift.schemas.care.expense_schema import ExpenseResponse

router = APIRouter()

@router.post("/{expense_id}/approve", response_model=ExpenseResponse)
async def approve_expense(
    expense_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = ExpenseService(session)
    return await service.approve_expense(expense_id)

@router.post("/{expense_id}/reject", response_model=ExpenseResponse)
async def reject_expense(
    expense_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = ExpenseService(session)
    return await service.reject_expense(expense_id)
