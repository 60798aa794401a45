import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from medisco.database import ensure_appointment_schema, ensure_chat_history_schema

logger = logging.getLogger(__name__)


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
        ensure_chat_history_schema()
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc


def store_error(exc: Exception) -> HTTPException:
    logger.exception('Database request failed.')
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )
