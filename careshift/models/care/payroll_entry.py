from sqlalchemy import Column, Integer, DateTime, Numeric, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from careshift.db.base import BaseModel
from careshift.models.shared.enums import PaymentStatus

class PayrollEntry(BaseModel):
    __tablename__ = 'payroll_entries'

    work_log_id = Column(Integer, ForeignKey('work_logs.id'), nullable=False, unique=True)
    care_team_member_id = Column(Integer, ForeignKey('care_team_members.id'), nullable=False, index=True)
    care_plan_id = Column(Integer, ForeignKey('care_plans.id'), nullable=False, index=True)
    regular_hours = Column(Numeric(6, 2), nullable=False, default=0)
    overtime_hours = Column(Numeric(6, 2), default=0)
    holiday_hours = Column(Numeric(6, 2), default=0)
    regular_rate = Column(Numeric(10, 2), nullable=False)
    overtime_rate = Column(Numeric(10, 2))
    holiday_rate = Column(Numeric(10, 2))
    expense_total = Column(Numeric(10, 2))
    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_status = Column(SQLEnum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    payment_date = Column(DateTime(timezone=True))
    pay_period_start = Column(DateTime)
    pay_period_end = Column(DateTime)

    # Relationships
    work_log = relationship("WorkLog", back_populates="payroll_entry")
    care_team_member = relationship("CareTeamMember")

    @property
    def caregiver_name(self):
        # Only populated when the member was eager-loaded with the entry
        member = self.__dict__.get("care_team_member")
        return member.display_name if member is not None else None
