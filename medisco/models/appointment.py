"""Appointment model definitions."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, func
from medisco.database import Base


class Appointment(Base):
    """Represents a booked appointment."""
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    patient_name = Column(String(100))
    patient_email = Column(String(100))
    patient_phone = Column(String(20))
    doctor_id = Column(Integer, ForeignKey("doctors.id"))
    appointment_date = Column(Date)
    appointment_time = Column(String(50))
    status = Column(String(20), default="scheduled")  # scheduled/cancelled/completed
    created_at = Column(DateTime, server_default=func.now())
