from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from careshift.models.shared.enums import TeamMemberStatus

class CareTeamMemberCreate(BaseModel):
    care_plan_id: int
    caregiver_id: int
    display_name: Optional[str] = None
    role: str = "caregiver"
    regular_rate: Optional[Decimal] = Field(None, ge=0)
    overtime_rate: Optional[Decimal] = Field(None, ge=0)

class CareTeamMemberUpdate(BaseModel):
    display_name: Optional[str] = None
    role: Optional[str] = None
    status: Optional[TeamMemberStatus] = None
    regular_rate: Optional[Decimal] = Field(None, ge=0)
    overtime_rate: Optional[Decimal] = Field(None, ge=0)

    @validator('status')
    def reject_null_status(cls, v):
        if v is None:
            raise ValueError('status cannot be null; omit it to keep the current value')
        return v

class CareTeamMemberResponse(BaseModel):
    id: int
    care_plan_id: int
    caregiver_id: int
    display_name: Optional[str] = None
    role: Optional[str] = None
    status: TeamMemberStatus
    regular_rate: Optional[Decimal] = None
    overtime_rate: Optional[Decimal] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
