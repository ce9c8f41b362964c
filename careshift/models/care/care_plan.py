from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from careshift.db.base import BaseModel

class CarePlan(BaseModel):
    """Identity of an externally managed care plan, kept for foreign keys."""
    __tablename__ = 'care_plans'

    family_id = Column(Integer, nullable=False, index=True)
    title = Column(String(200), nullable=False)

    # Relationships
    team_members = relationship("CareTeamMember", back_populates="care_plan")
    shifts = relationship("CareShift", back_populates="care_plan")
