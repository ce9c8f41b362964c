from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from careshift.db.base import BaseModel
from careshift.models.shared.enums import ExpenseCategory, ExpenseStatus

class WorkLogExpense(BaseModel):
    __tablename__ = 'work_log_expenses'

    work_log_id = Column(Integer, ForeignKey('work_logs.id'), nullable=False, index=True)
    category = Column(SQLEnum(ExpenseCategory), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False)
    receipt_url = Column(String(500))
    status = Column(SQLEnum(ExpenseStatus), nullable=False, default=ExpenseStatus.PENDING)

    # Relationships
    work_log = relationship("WorkLog", back_populates="expenses")
