from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from careshift.models.shared.enums import ExpenseCategory, ExpenseStatus

class ExpenseCreate(BaseModel):
    category: ExpenseCategory
    amount: Decimal = Field(..., ge=0)
    description: str
    receipt_url: Optional[str] = None

    @validator('description')
    def validate_description(cls, v):
        if not v or not v.strip():
            raise ValueError('Expense description is required')
        return v.strip()

class ExpenseResponse(BaseModel):
    id: int
    work_log_id: int
    category: ExpenseCategory
    amount: Decimal
    description: str
    receipt_url: Optional[str] = None
    status: ExpenseStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
