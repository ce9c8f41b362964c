from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.orm import relationship
from careshift.db.base import BaseModel
from careshift.models.shared.enums import TeamMemberStatus

class CareTeamMember(BaseModel):
    __tablename__ = 'care_team_members'
    __table_args__ = (
        UniqueConstraint('care_plan_id', 'caregiver_id', name='uq_care_team_members_plan_caregiver'),
    )

    care_plan_id = Column(Integer, ForeignKey('care_plans.id'), nullable=False, index=True)
    caregiver_id = Column(Integer, nullable=False, index=True)  # Profile id from the auth system
    display_name = Column(String(150))
    role = Column(String(50), default="caregiver")
    status = Column(SQLEnum(TeamMemberStatus), nullable=False, default=TeamMemberStatus.ACTIVE)
    regular_rate = Column(Numeric(10, 2))
    overtime_rate = Column(Numeric(10, 2))

    # Relationships
    care_plan = relationship("CarePlan", back_populates="team_members")
    work_logs = relationship("WorkLog", back_populates="care_team_member")

    @property
    def is_active(self) -> bool:
        return self.status == TeamMemberStatus.ACTIVE
