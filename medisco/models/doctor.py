"""Doctor model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from medisco.database import Base


class Doctor(Base):
    """Represents a doctor and the weekly schedule they can be booked on."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    specialization = Column(String(100))
    department_id = Column(Integer, ForeignKey("departments.id"))
    email = Column(String(100))
    phone = Column(String(20))
    available_days = Column(String(100), default="")  # e.g. "Monday, Wednesday"
    available_times = Column(String(255), default="")  # e.g. "09:00-09:30, 10:00-10:30"
