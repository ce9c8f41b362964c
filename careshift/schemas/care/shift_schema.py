from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import date, datetime
from careshift.core.exceptions import ParseError, ValidationError
from careshift.models.shared.enums import ShiftStatus, WeekdayCoverage, WeekendCoverage
from careshift.utils.time_resolution import normalize_weekdays, parse_time_of_day


def _time_of_day(v):
    try:
        parse_time_of_day(v)
    except ParseError as e:
        raise ValueError(e.detail)
    return v.strip()


class CustomShiftDefinition(BaseModel):
    """Coverage template: weekdays plus an HH:MM window. Never stored as-is."""
    days: List[str]
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    title: Optional[str] = None

    class Config:
        populate_by_name = True

    @validator('days')
    def validate_days(cls, v):
        try:
            return [d.value for d in normalize_weekdays(v)]
        except ValidationError as e:
            raise ValueError(e.detail)

    @validator('start_time', 'end_time')
    def validate_time(cls, v):
        return _time_of_day(v)


class CustomShiftGenerationRequest(BaseModel):
    care_plan_id: int
    family_id: int
    definitions: List[CustomShiftDefinition]


class ScheduleTextGenerationRequest(BaseModel):
    care_plan_id: int
    family_id: int
    schedule_text: str


class CoverageGenerationRequest(BaseModel):
    care_plan_id: int
    family_id: int
    weekday_coverage: WeekdayCoverage = WeekdayCoverage.NONE
    weekend_coverage: WeekendCoverage = WeekendCoverage.NO


class PresetRangeGenerationRequest(BaseModel):
    care_plan_id: int
    family_id: int
    preset_id: str
    from_date: date
    to_date: date
    caregiver_id: Optional[int] = None
    location: Optional[str] = None

    @validator('to_date')
    def validate_range(cls, v, values):
        if 'from_date' in values and v < values['from_date']:
            raise ValueError('to_date must be on or after from_date')
        return v


class ShiftPresetResponse(BaseModel):
    id: str
    label: str
    description: str
    start: str
    end: str


class ShiftCreate(BaseModel):
    care_plan_id: int
    family_id: int
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    caregiver_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    recurring_pattern: Optional[str] = None
    google_calendar_event_id: Optional[str] = None

    @validator('title')
    def validate_title(cls, v):
        if not v or not v.strip():
            raise ValueError('Shift title is required')
        return v.strip()

    @validator('end_time')
    def validate_end_time(cls, v, values):
        if 'start_time' in values and v <= values['start_time']:
            raise ValueError('end_time must be after start_time')
        return v


class ShiftUpdate(BaseModel):
    """Partial update. Sending caregiver_id as null unassigns the shift."""
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    caregiver_id: Optional[int] = None
    status: Optional[ShiftStatus] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    recurring_pattern: Optional[str] = None
    google_calendar_event_id: Optional[str] = None

    @validator('status', 'start_time', 'end_time')
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null; omit it to keep the current value')
        return v

    @validator('title')
    def validate_title(cls, v):
        if v is None or not v.strip():
            raise ValueError('Shift title is required')
        return v.strip()


class ShiftResponse(BaseModel):
    id: int
    care_plan_id: int
    family_id: int
    caregiver_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    status: ShiftStatus
    start_time: datetime
    end_time: datetime
    recurring_pattern: Optional[str] = None
    google_calendar_event_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SkippedDefinition(BaseModel):
    definition: dict
    error: str


class ShiftGenerationResult(BaseModel):
    """Result of a batch generation: what was created and what was skipped"""
    total_requested: int
    succeeded: int
    skipped: List[SkippedDefinition] = []
    shifts: List[ShiftResponse] = []
