from pydantic import BaseModel, Field, validator
from typing import Optional
from decimal import Decimal
from datetime import datetime
from careshift.models.shared.enums import WorkLogStatus
from careshift.schemas.care.payroll_schema import PayrollEntryResponse


class WorkLogBase(BaseModel):
    start_time: datetime
    end_time: datetime
    break_minutes: int = Field(0, ge=0)
    notes: Optional[str] = None
    base_rate: Optional[Decimal] = Field(None, ge=0)
    rate_multiplier: Optional[Decimal] = Field(None, gt=0)

    @validator('end_time')
    def validate_end_time(cls, v, values):
        if 'start_time' in values and v <= values['start_time']:
            raise ValueError('end_time must be after start_time')
        return v

    @validator('break_minutes')
    def validate_break(cls, v, values):
        start, end = values.get('start_time'), values.get('end_time')
        if start and end and v * 60 > (end - start).total_seconds():
            raise ValueError('Break cannot be longer than the time worked')
        return v


class WorkLogCreate(WorkLogBase):
    care_team_member_id: int
    care_plan_id: int
    shift_id: Optional[int] = None


class WorkLogFromShift(BaseModel):
    """Derive a work log from a shift; times default to the shift's window"""
    shift_id: int
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    break_minutes: int = Field(0, ge=0)
    notes: Optional[str] = None
    base_rate: Optional[Decimal] = Field(None, ge=0)
    rate_multiplier: Optional[Decimal] = Field(None, gt=0)


class WorkLogUpdate(BaseModel):
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    break_minutes: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    base_rate: Optional[Decimal] = Field(None, ge=0)
    rate_multiplier: Optional[Decimal] = Field(None, gt=0)

    @validator('start_time', 'end_time', 'break_minutes')
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null; omit it to keep the current value')
        return v


class WorkLogReject(BaseModel):
    reason: Optional[str] = None


class WorkLogResponse(BaseModel):
    id: int
    care_team_member_id: int
    care_plan_id: int
    shift_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    break_minutes: int
    notes: Optional[str] = None
    base_rate: Optional[Decimal] = None
    rate_multiplier: Optional[Decimal] = None
    status: WorkLogStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WorkLogApprovalResponse(BaseModel):
    work_log: WorkLogResponse
    payroll_entry: PayrollEntryResponse
