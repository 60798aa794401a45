from sqlalchemy import Column, Integer, String, Text
from medisco.database import Base


class FAQ(Base):
    __tablename__ = "faqs"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(50), index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
