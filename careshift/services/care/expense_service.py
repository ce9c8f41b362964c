import logging
from typing import List
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careshift.core.exceptions import ConflictError, NotFoundError, StorageError
from careshift.models.care.work_log import WorkLog
from careshift.models.care.work_log_expense import WorkLogExpense
from careshift.models.shared.enums import ExpenseStatus
from careshift.schemas.care.expense_schema import ExpenseCreate

logger = logging.getLogger(__name__)


class ExpenseService:
    """Out-of-pocket expenses attached to work logs. Only approved ones are reimbursed."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_expense(self, work_log_id: int, data: ExpenseCreate) -> WorkLogExpense:
        work_log = await self.session.get(WorkLog, work_log_id)
        if not work_log:
            raise NotFoundError(f"Work log with ID {work_log_id} not found")

        try:
            expense = WorkLogExpense(**data.dict(), work_log_id=work_log_id, status=ExpenseStatus.PENDING)
            self.session.add(expense)
            await self.session.commit()
            await self.session.refresh(expense)
            logger.info(f"Expense {expense.id} ({expense.category.value}, {expense.amount}) added to work log {work_log_id}")
            return expense
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error adding expense to work log {work_log_id}: {e}")
            raise StorageError()

    async def get_expense(self, expense_id: int) -> WorkLogExpense:
        result = await self.session.execute(select(WorkLogExpense).where(WorkLogExpense.id == expense_id))
        expense = result.scalar_one_or_none()
        if not expense:
            raise NotFoundError(f"Expense with ID {expense_id} not found")
        return expense

    async def get_expenses(self, work_log_id: int) -> List[WorkLogExpense]:
        result = await self.session.scalars(
            select(WorkLogExpense)
            .where(WorkLogExpense.work_log_id == work_log_id)
            .order_by(WorkLogExpense.id)
        )
        return list(result.all())

    async def _review(self, expense_id: int, new_status: ExpenseStatus) -> WorkLogExpense:
        expense = await self.get_expense(expense_id)
        if expense.status != ExpenseStatus.PENDING:
            raise ConflictError(f"Expense {expense_id} has already been {expense.status.value}")

        try:
            expense.status = new_status
            await self.session.commit()
            await self.session.refresh(expense)
            logger.info(f"Expense {expense_id} {new_status.value}")
            return expense
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error reviewing expense {expense_id}: {e}")
            raise StorageError()

    async def approve_expense(self, expense_id: int) -> WorkLogExpense:
        return await self._review(expense_id, ExpenseStatus.APPROVED)

    async def reject_expense(self, expense_id: int) -> WorkLogExpense:
        return await self._review(expense_id, ExpenseStatus.REJECTED)
