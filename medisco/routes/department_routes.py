from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medisco.database import get_db
from medisco.models.department import Department
from medisco.routes.common import store_error

router = APIRouter(tags=['departments'])


class DepartmentResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    location: str | None = None
    phone: str | None = None

    class Config:
        from_attributes = True


@router.get('', response_model=list[DepartmentResponse])
def list_departments(db: Session = Depends(get_db)):
    try:
        return db.query(Department).order_by(Department.id.asc()).all()
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc
