import os
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from medisco.database import Base, get_db  # noqa: E402
from medisco.main import app  # noqa: E402
from medisco.models.appointment import Appointment  # noqa: E402
from medisco.models.department import Department  # noqa: E402
from medisco.models.doctor import Doctor  # noqa: E402
from medisco.models.faq import FAQ  # noqa: E402


@pytest.fixture
def db(monkeypatch: pytest.MonkeyPatch):
    for module in ('appointment_routes', 'chat_routes', 'doctor_routes'):
        monkeypatch.setattr(f'medisco.routes.{module}.ensure_database_ready', lambda: None)

    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def hospital(db):
    cardiology = Department(name='Cardiology', description='Heart care', location='Block A', phone='555-0101')
    db.add(cardiology)
    db.flush()

    doctors = [
        Doctor(
            name='Dr. Sarah Perera',
            specialization='Cardiologist',
            department_id=cardiology.id,
            available_days='Monday, Wednesday',
            available_times='9:00,10:00',
        ),
        Doctor(
            name='Dr Nimal Silva',
            specialization='Pediatrician',
            available_days='Tuesday, Thursday',
            available_times='14:00, 15:00',
        ),
        Doctor(
            name='Amaya Fernando',
            specialization='General Physician',
            available_days='monday',
            available_times='08:00',
        ),
    ]
    db.add_all(doctors)
    db.add_all([
        FAQ(category='general', question='Visiting hours?', answer='10 AM to 8 PM.'),
        FAQ(category='emergency', question='Is the ER open at night?', answer='Yes, 24/7.'),
    ])
    db.commit()

    return {doctor.name: doctor for doctor in doctors}


@pytest.fixture
def book(db):
    def _book(doctor: Doctor, appointment_date: date, appointment_time: str, **fields) -> Appointment:
        values = {
            'patient_name': 'Jane Doe',
            'patient_email': 'jane@example.com',
            'patient_phone': '555-0000',
            'status': 'scheduled',
        }
        values.update(fields)
        appointment = Appointment(
            doctor_id=doctor.id,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            **values,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _book
