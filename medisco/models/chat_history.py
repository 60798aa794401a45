"""Chat history model definitions."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Text, func
from medisco.database import Base


class ChatHistory(Base):
    """Represents one chatbot exchange and the user's feedback on it."""
    __tablename__ = "chat_history"

    id = Column(Integer, primary_key=True)
    user_input = Column(Text)
    bot_response = Column(Text)
    is_correct = Column(Boolean, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
