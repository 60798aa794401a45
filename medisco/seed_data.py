"""Create the tables and load sample departments, doctors and FAQs.

Usage:
    python -m medisco.seed_data
"""
import sys

from sqlalchemy.exc import SQLAlchemyError

from medisco.database import Base, SessionLocal, engine
from medisco.models.appointment import Appointment  # noqa: F401
from medisco.models.chat_history import ChatHistory  # noqa: F401
from medisco.models.department import Department
from medisco.models.doctor import Doctor
from medisco.models.faq import FAQ

DEPARTMENTS = [
    {'name': 'Cardiology', 'description': 'Heart and blood vessel care.', 'location': 'Block A, Floor 2', 'phone': '555-0101'},
    {'name': 'Pediatrics', 'description': 'Care for infants, children and teens.', 'location': 'Block B, Floor 1', 'phone': '555-0102'},
    {'name': 'General Medicine', 'description': 'Primary care and general consultations.', 'location': 'Block A, Floor 1', 'phone': '555-0103'},
]

DOCTORS = [
    {
        'name': 'Dr. Sarah Perera',
        'specialization': 'Cardiologist',
        'department': 'Cardiology',
        'available_days': 'Monday, Wednesday, Friday',
        'available_times': '09:00-09:30, 09:30-10:00, 10:00-10:30, 10:30-11:00',
    },
    {
        'name': 'Dr. Nimal Silva',
        'specialization': 'Pediatrician',
        'department': 'Pediatrics',
        'available_days': 'Tuesday, Thursday, Saturday',
        'available_times': '14:00-14:30, 14:30-15:00, 15:00-15:30',
    },
    {
        'name': 'Dr. Amaya Fernando',
        'specialization': 'General Physician',
        'department': 'General Medicine',
        'available_days': 'Monday, Tuesday, Wednesday, Thursday, Friday',
        'available_times': '08:00-08:30, 08:30-09:00, 11:00-11:30, 11:30-12:00',
    },
]

FAQS = [
    {'category': 'general', 'question': 'What are the visiting hours?', 'answer': 'Visiting hours are 10:00 AM to 8:00 PM every day.'},
    {'category': 'general', 'question': 'Where can I park?', 'answer': 'Visitor parking is available at the main entrance.'},
    {'category': 'appointments', 'question': 'How do I book an appointment?', 'answer': 'Ask the chatbot to book with a doctor, or call the front desk.'},
    {'category': 'emergency', 'question': 'Is the emergency department open at night?', 'answer': 'Yes, the emergency department is open 24/7.'},
]


def seed(db) -> int:
    if db.query(Department).first() is not None:
        return 0

    departments = {item['name']: Department(**item) for item in DEPARTMENTS}
    db.add_all(departments.values())
    db.flush()

    for item in DOCTORS:
        fields = {key: value for key, value in item.items() if key != 'department'}
        db.add(Doctor(department_id=departments[item['department']].id, **fields))

    db.add_all(FAQ(**item) for item in FAQS)
    db.commit()

    return len(DEPARTMENTS) + len(DOCTORS) + len(FAQS)


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        inserted = seed(db)
    except SQLAlchemyError as exc:
        db.rollback()
        print('Seeding failed:', exc, file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    if inserted:
        print(f'Inserted {inserted} rows.')
    else:
        print('Database already has data; nothing to seed.')


if __name__ == '__main__':
    main()
