from sqlalchemy import Column, Integer, DateTime, Numeric, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from careshift.db.base import BaseModel
from careshift.models.shared.enums import WorkLogStatus

class WorkLog(BaseModel):
    __tablename__ = 'work_logs'

    care_team_member_id = Column(Integer, ForeignKey('care_team_members.id'), nullable=False, index=True)
    care_plan_id = Column(Integer, ForeignKey('care_plans.id'), nullable=False, index=True)
    shift_id = Column(Integer, ForeignKey('care_shifts.id', ondelete='RESTRICT'), nullable=True, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    break_minutes = Column(Integer, nullable=False, default=0)
    notes = Column(Text)
    # Recorded per-log pay terms; payroll keeps using the team member rates
    base_rate = Column(Numeric(10, 2), nullable=True)
    rate_multiplier = Column(Numeric(4, 2), nullable=True)
    status = Column(SQLEnum(WorkLogStatus), nullable=False, default=WorkLogStatus.PENDING)

    # Relationships
    care_team_member = relationship("CareTeamMember", back_populates="work_logs")
    shift = relationship("CareShift", back_populates="work_logs")
    expenses = relationship("WorkLogExpense", back_populates="work_log")
    payroll_entry = relationship("PayrollEntry", back_populates="work_log", uselist=False)
