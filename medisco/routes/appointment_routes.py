import logging
from datetime import date, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medisco.core.scheduling import current_date
from medisco.database import get_db
from medisco.models.appointment import Appointment
from medisco.models.doctor import Doctor
from medisco.routes.common import ensure_database_ready, store_error

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)

SCHEDULED_STATUS = 'scheduled'
REMINDER_WINDOW_DAYS = 1


class CreateAppointmentRequest(BaseModel):
    patient_name: str | None = None
    patient_email: str | None = None
    patient_phone: str | None = None
    doctor_id: int
    appointment_date: date
    appointment_time: str


class BookingResponse(BaseModel):
    message: str
    appointment_id: int = Field(alias='appointmentId')

    class Config:
        populate_by_name = True


class BookedTimesResponse(BaseModel):
    booked_times: list[str] = Field(alias='bookedTimes')

    class Config:
        populate_by_name = True


class AppointmentResponse(BaseModel):
    id: int
    patient_name: str | None = None
    patient_email: str | None = None
    patient_phone: str | None = None
    doctor_id: int | None = None
    doctor_name: str | None = None
    appointment_date: date | None = None
    appointment_time: str | None = None
    status: str | None = None
    created_at: datetime | None = None


def to_appointment_response(appointment: Appointment, doctor_name: str | None) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        patient_name=appointment.patient_name,
        patient_email=appointment.patient_email,
        patient_phone=appointment.patient_phone,
        doctor_id=appointment.doctor_id,
        doctor_name=doctor_name,
        appointment_date=appointment.appointment_date,
        appointment_time=appointment.appointment_time,
        status=appointment.status,
        created_at=appointment.created_at,
    )


def get_booked_times_by_doctor(doctor_ids: list[int], target_date: date, db: Session) -> dict[int, list[str]]:
    """Map each doctor id to the distinct time tokens already scheduled on ``target_date``."""
    if not doctor_ids:
        return {}

    rows = db.query(Appointment.doctor_id, Appointment.appointment_time).filter(
        Appointment.doctor_id.in_(doctor_ids),
        Appointment.appointment_date == target_date,
        Appointment.status == SCHEDULED_STATUS,
    ).order_by(Appointment.id.asc()).all()

    booked: dict[int, list[str]] = {}
    for doctor_id, appointment_time in rows:
        times = booked.setdefault(doctor_id, [])
        if appointment_time not in times:
            times.append(appointment_time)

    return booked


@router.get('/availability', response_model=BookedTimesResponse)
def get_booked_times(
    doctor_id: int = Query(..., alias='doctorId'),
    appointment_date: date = Query(..., alias='date'),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        rows = db.query(Appointment.appointment_time).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_date == appointment_date,
            Appointment.status == SCHEDULED_STATUS,
        ).order_by(Appointment.id.asc()).all()
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc

    return BookedTimesResponse(booked_times=[appointment_time for (appointment_time,) in rows])


@router.post('', response_model=BookingResponse)
def create_appointment(data: CreateAppointmentRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        appointment = Appointment(
            patient_name=data.patient_name,
            patient_email=data.patient_email,
            patient_phone=data.patient_phone,
            doctor_id=data.doctor_id,
            appointment_date=data.appointment_date,
            appointment_time=data.appointment_time,
            status=SCHEDULED_STATUS,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error(exc) from exc

    logger.info(
        'Booked appointment %s with doctor %s on %s at %s.',
        appointment.id,
        data.doctor_id,
        data.appointment_date.isoformat(),
        data.appointment_time,
    )

    return BookingResponse(
        message='Appointment booked successfully',
        appointment_id=appointment.id,
    )


@router.get('/latest', response_model=AppointmentResponse)
def get_latest_appointment(
    email: str | None = Query(default=None),
    name: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    patient_filters = []
    if email:
        patient_filters.append(Appointment.patient_email == email)
    if name:
        patient_filters.append(Appointment.patient_name.like(f'%{name}%'))

    if not patient_filters:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='No upcoming appointments found',
        )

    try:
        row = db.query(Appointment, Doctor.name).join(
            Doctor, Appointment.doctor_id == Doctor.id,
        ).filter(
            or_(*patient_filters),
            Appointment.appointment_date >= current_date(),
            Appointment.status == SCHEDULED_STATUS,
        ).order_by(
            Appointment.appointment_date.asc(),
            Appointment.appointment_time.asc(),
        ).first()
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc

    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='No upcoming appointments found',
        )

    appointment, doctor_name = row
    return to_appointment_response(appointment, doctor_name)


@router.get('/reminders', response_model=list[AppointmentResponse])
def list_appointment_reminders(db: Session = Depends(get_db)):
    ensure_database_ready()

    today = current_date()

    try:
        rows = db.query(Appointment, Doctor.name).join(
            Doctor, Appointment.doctor_id == Doctor.id,
        ).filter(
            Appointment.appointment_date >= today,
            Appointment.appointment_date <= today + timedelta(days=REMINDER_WINDOW_DAYS),
            Appointment.status == SCHEDULED_STATUS,
        ).order_by(
            Appointment.appointment_date.asc(),
            Appointment.appointment_time.asc(),
        ).all()
    except SQLAlchemyError as exc:
        raise store_error(exc) from exc

    return [to_appointment_response(appointment, doctor_name) for appointment, doctor_name in rows]
