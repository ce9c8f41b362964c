from sqlalchemy import Column, String, Boolean, Text, Numeric, Date
from careshift.db.base import BaseModel

class Holiday(BaseModel):
    __tablename__ = 'holidays'

    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False, index=True)
    pay_multiplier = Column(Numeric(4, 2), nullable=False, default=1)
    description = Column(Text)
    is_active = Column(Boolean, default=True)
