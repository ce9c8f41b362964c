from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from careshift.db.base import BaseModel
from careshift.models.shared.enums import ShiftStatus

class CareShift(BaseModel):
    __tablename__ = 'care_shifts'

    care_plan_id = Column(Integer, ForeignKey('care_plans.id'), nullable=False, index=True)
    family_id = Column(Integer, nullable=False)
    caregiver_id = Column(Integer, nullable=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    location = Column(String(255))
    status = Column(SQLEnum(ShiftStatus), nullable=False, default=ShiftStatus.OPEN)
    # Wall-clock time of the care plan, stored without zone
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    recurring_pattern = Column(String(100))  # e.g. "monday,wednesday"
    google_calendar_event_id = Column(String(255))

    # Relationships
    care_plan = relationship("CarePlan", back_populates="shifts")
    work_logs = relationship("WorkLog", back_populates="shift", passive_deletes="all")
