import os

import pytest
from sqlalchemy import create_engine, inspect, text

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from medisco import database  # noqa: E402


@pytest.fixture
def legacy_engine(tmp_path, monkeypatch: pytest.MonkeyPatch):
    engine = create_engine(f'sqlite:///{tmp_path / "legacy.db"}')
    with engine.begin() as connection:
        connection.execute(text(
            'CREATE TABLE appointments ('
            'id INTEGER PRIMARY KEY, patient_name VARCHAR, patient_email VARCHAR, patient_phone VARCHAR, '
            'doctor_id INTEGER, appointment_date DATE, appointment_time VARCHAR)'
        ))
        connection.execute(text(
            'CREATE TABLE chat_history (id INTEGER PRIMARY KEY, user_input TEXT, bot_response TEXT)'
        ))

    monkeypatch.setattr(database, 'engine', engine)
    monkeypatch.setattr(database, '_appointment_schema_checked', False)
    monkeypatch.setattr(database, '_chat_history_schema_checked', False)
    try:
        yield engine
    finally:
        engine.dispose()


def test_ensure_appointment_schema_adds_columns_and_indexes(legacy_engine) -> None:
    database.ensure_appointment_schema()

    inspector = inspect(legacy_engine)
    columns = {column['name'] for column in inspector.get_columns('appointments')}
    indexes = {index['name'] for index in inspector.get_indexes('appointments')}

    assert {'status', 'created_at'} <= columns
    assert {'idx_appointments_doctor_date', 'idx_appointments_patient_email'} <= indexes


def test_legacy_appointments_default_to_scheduled(legacy_engine) -> None:
    with legacy_engine.begin() as connection:
        connection.execute(text(
            "INSERT INTO appointments (patient_name, doctor_id, appointment_date, appointment_time) "
            "VALUES ('Jane Doe', 1, '2026-01-05', '9:00')"
        ))

    database.ensure_appointment_schema()

    with legacy_engine.connect() as connection:
        status = connection.execute(text('SELECT status FROM appointments')).scalar_one()

    assert status == 'scheduled'


def test_ensure_chat_history_schema_adds_feedback_column(legacy_engine) -> None:
    database.ensure_chat_history_schema()

    columns = {column['name'] for column in inspect(legacy_engine).get_columns('chat_history')}

    assert {'is_correct', 'created_at'} <= columns


def test_schema_checks_run_once_per_process(legacy_engine, monkeypatch: pytest.MonkeyPatch) -> None:
    database.ensure_appointment_schema()
    database.ensure_chat_history_schema()

    # Any further engine access would fail.
    monkeypatch.setattr(database, 'engine', None)

    database.ensure_appointment_schema()
    database.ensure_chat_history_schema()

    assert database._appointment_schema_checked is True
    assert database._chat_history_schema_checked is True


def test_schema_checks_skip_missing_tables(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    engine = create_engine(f'sqlite:///{tmp_path / "empty.db"}')
    monkeypatch.setattr(database, 'engine', engine)
    monkeypatch.setattr(database, '_appointment_schema_checked', False)
    monkeypatch.setattr(database, '_chat_history_schema_checked', False)

    database.ensure_appointment_schema()
    database.ensure_chat_history_schema()

    assert inspect(engine).get_table_names() == []
    engine.dispose()
