"""Department model definitions."""

from sqlalchemy import Column, Integer, String, Text
from medisco.database import Base


class Department(Base):
    """Represents a hospital department."""
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    location = Column(String(100))
    phone = Column(String(20))
