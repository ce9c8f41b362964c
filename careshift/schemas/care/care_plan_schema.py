from pydantic import BaseModel, validator
from typing import Optional
from datetime import datetime

class CarePlanCreate(BaseModel):
    family_id: int
    title: str

    @validator('title')
    def validate_title(cls, v):
        if not v or len(v.strip()) < 2:
            raise ValueError('Care plan title must be at least 2 characters')
        return v.strip()

class CarePlanResponse(BaseModel):
    id: int
    family_id: int
    title: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
