import datetime as dt
from pydantic import BaseModel, validator
from typing import Optional
from decimal import Decimal

class HolidayBase(BaseModel):
    name: str
    date: dt.date
    pay_multiplier: Decimal = Decimal("1.0")
    description: Optional[str] = None

    @validator('pay_multiplier')
    def validate_pay_multiplier(cls, v):
        if v < 1:
            raise ValueError('Holiday pay multiplier must be at least 1.0')
        return v

class HolidayCreate(HolidayBase):
    @validator('name')
    def validate_name(cls, v):
        if not v or len(v.strip()) < 2:
            raise ValueError('Holiday name must be at least 2 characters')
        return v.strip()

class HolidayUpdate(BaseModel):
    name: Optional[str] = None
    date: Optional[dt.date] = None
    pay_multiplier: Optional[Decimal] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @validator('date', 'is_active')
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null; omit it to keep the current value')
        return v

    @validator('name')
    def validate_name(cls, v):
        if v is None or len(v.strip()) < 2:
            raise ValueError('Holiday name must be at least 2 characters')
        return v.strip()

    @validator('pay_multiplier')
    def validate_pay_multiplier(cls, v):
        if v is None:
            raise ValueError('Holiday pay multiplier cannot be null')
        if v < 1:
            raise ValueError('Holiday pay multiplier must be at least 1.0')
        return v

class HolidayResponse(HolidayBase):
    id: int
    is_active: bool
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
