import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medisco.core.scheduling import (
    InvalidDayError,
    compute_availability,
    current_date,
    resolve_relative_day,
    weekday_name,
)
from medisco.database import get_db
from medisco.models.doctor import Doctor
from medisco.routes.appointment_routes import get_booked_times_by_doctor
from medisco.routes.common import ensure_database_ready, store_error

router = APIRouter(tags=['doctors'])

logger = logging.getLogger(__name__)

TITLE_PREFIXES = ('Dr. ', 'Dr ')


class DoctorSummaryResponse(BaseModel):
    id: int
    name: str
    specialization: str | None = None
    available_days: str | None = None
    available_times: str | None = None

    class Config:
        from_attributes = True


class DoctorResponse(DoctorSummaryResponse):
    department_id: int | None = None
    email: str | None = None
    phone: str | None = None


class DoctorScheduleResponse(BaseModel):
    available_days: str | None = None
    available_times: str | None = None

    class Config:
        from_attributes = True


class DoctorAvailabilityResponse(BaseModel):
    id: int
    name: str
    specialization: str | None = None
    available: bool
    available_times: list[str] = Field(alias='availableTimes')
    available_days: str | None = Field(default=None, alias='availableDays')
    booked_times: list[str] = Field(alias='bookedTimes')

    class Config:
        populate_by_name = True


class AvailableTodayResponse(BaseModel):
    id: int
    name: str
    specialization: str | None = None
    available_times: list[str] = Field(alias='availableTimes')

    class Config:
        populate_by_name = True


def strip_title(name: str) -> str:
    for prefix in TITLE_PREFIXES:
        name = name.replace(prefix, '', 1)
    return name


def get_doctor_or_404(doctor_id: int, db: Session) -> Doctor:
    doctor = db.query(Doctor).filter(Doctor.id == doctor_id).first()
    if not doctor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Doctor not found',
        )
    return doctor


@router.get('', response_model=list[DoctorSummaryResponse])
def list_doctors(
    specialization: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Doctor)
        if specialization:
            query = query.filter(Doctor.specialization.like(f'%{specialization}%'))

        return query.order_by(Doctor.id.asc()).all()
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc


@router.get('/availability', response_model=list[DoctorAvailabilityResponse])
def find_doctor_availability(
    name: str = Query(default=''),
    day: str = Query(default='today'),
    db: Session = Depends(get_db),
):
    try:
        target_date = resolve_relative_day(day)
    except InvalidDayError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Invalid day specified',
        ) from exc

    ensure_database_ready()

    try:
        pattern = f'%{name}%'
        doctors = db.query(Doctor).filter(
            or_(Doctor.name.like(pattern), Doctor.specialization.like(pattern)),
        ).order_by(Doctor.id.asc()).all()

        if not doctors:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail='No matching doctors found',
            )

        booked_by_doctor = get_booked_times_by_doctor([doctor.id for doctor in doctors], target_date, db)
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc

    results = []
    for doctor in doctors:
        availability = compute_availability(
            doctor.available_days,
            doctor.available_times,
            booked_by_doctor.get(doctor.id, []),
            target_date,
        )
        results.append(
            DoctorAvailabilityResponse(
                id=doctor.id,
                name=doctor.name,
                specialization=doctor.specialization,
                available=availability.available,
                available_times=availability.available_times,
                available_days=doctor.available_days,
                booked_times=availability.booked_times,
            )
        )

    return results


@router.get('/available-today', response_model=list[AvailableTodayResponse])
def list_doctors_available_today(db: Session = Depends(get_db)):
    ensure_database_ready()

    today = current_date()

    try:
        doctors = db.query(Doctor).filter(
            func.lower(Doctor.available_days).like(f'%{weekday_name(today)}%'),
        ).order_by(Doctor.id.asc()).all()

        booked_by_doctor = get_booked_times_by_doctor([doctor.id for doctor in doctors], today, db)
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc

    results = []
    for doctor in doctors:
        availability = compute_availability(
            doctor.available_days,
            doctor.available_times,
            booked_by_doctor.get(doctor.id, []),
            today,
        )
        if not availability.available_times:
            continue

        results.append(
            AvailableTodayResponse(
                id=doctor.id,
                name=strip_title(doctor.name),
                specialization=doctor.specialization,
                available_times=availability.available_times,
            )
        )

    logger.info('%d doctors have open slots on %s.', len(results), today.isoformat())
    return results


@router.get('/{doctor_id}', response_model=DoctorResponse)
def get_doctor(doctor_id: int, db: Session = Depends(get_db)):
    try:
        return get_doctor_or_404(doctor_id, db)
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc


@router.get('/{doctor_id}/availability', response_model=DoctorScheduleResponse)
def get_doctor_schedule(doctor_id: int, db: Session = Depends(get_db)):
    try:
        return get_doctor_or_404(doctor_id, db)
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc
