import random

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medisco.core import config
from medisco.core.symptoms import SymptomAdvice, advise
from medisco.database import get_db
from medisco.models.chat_history import ChatHistory
from medisco.routes.common import ensure_database_ready, store_error

router = APIRouter(tags=['chat'])

ANGRY_RESPONSES = (
    "I'm here to help with hospital-related questions!",
    f'Please ask relevant questions about {config.HOSPITAL_NAME}!',
    "That's not what I'm programmed for! Stick to hospital queries!",
)


class SymptomCheckRequest(BaseModel):
    symptoms: str


class ChatHistoryRequest(BaseModel):
    user_input: str
    bot_response: str


class FeedbackRequest(BaseModel):
    is_correct: bool | None = None


class MessageResponse(BaseModel):
    message: str


class AngryResponse(BaseModel):
    response: str


@router.post('/symptom-checker', response_model=SymptomAdvice)
def check_symptoms(data: SymptomCheckRequest):
    return advise(data.symptoms)


@router.post('/chat-history', response_model=MessageResponse)
def save_chat_history(data: ChatHistoryRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        db.add(ChatHistory(user_input=data.user_input, bot_response=data.bot_response))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error(exc) from exc

    return MessageResponse(message='Chat history saved')


@router.put('/chat-history/{chat_id}/feedback', response_model=MessageResponse)
def record_feedback(chat_id: int, data: FeedbackRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    # Unknown ids are a no-op; the feedback is still acknowledged.
    try:
        db.query(ChatHistory).filter(ChatHistory.id == chat_id).update(
            {ChatHistory.is_correct: data.is_correct},
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error(exc) from exc

    return MessageResponse(message='Feedback received')


@router.get('/angry-response', response_model=AngryResponse)
def get_angry_response():
    return AngryResponse(response=random.choice(ANGRY_RESPONSES))
