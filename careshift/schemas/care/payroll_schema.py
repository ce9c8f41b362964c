from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal
from careshift.models.shared.enums import PaymentStatus


class PaymentProcessRequest(BaseModel):
    payment_date: Optional[datetime] = None


class PayrollEntryResponse(BaseModel):
    id: int
    work_log_id: int
    care_team_member_id: int
    care_plan_id: int
    regular_hours: Decimal
    overtime_hours: Optional[Decimal] = None
    holiday_hours: Optional[Decimal] = None
    regular_rate: Decimal
    overtime_rate: Optional[Decimal] = None
    holiday_rate: Optional[Decimal] = None
    expense_total: Optional[Decimal] = None
    total_amount: Decimal
    payment_status: PaymentStatus
    payment_date: Optional[datetime] = None
    pay_period_start: Optional[datetime] = None
    pay_period_end: Optional[datetime] = None
    caregiver_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
