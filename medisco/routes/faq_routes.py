from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medisco.database import get_db
from medisco.models.faq import FAQ
from medisco.routes.common import store_error

router = APIRouter(tags=['faqs'])


class FAQResponse(BaseModel):
    id: int
    category: str | None = None
    question: str
    answer: str

    class Config:
        from_attributes = True


@router.get('', response_model=list[FAQResponse])
def list_faqs(
    category: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(FAQ)
        if category:
            query = query.filter(FAQ.category == category)

        return query.order_by(FAQ.id.asc()).all()
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc
