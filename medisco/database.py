from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from medisco.core import config


def build_engine(database_url: str):
    if database_url.startswith('sqlite'):
        return create_engine(
            database_url,
            connect_args={'check_same_thread': False},
            echo=config.DB_ECHO,
        )

    # Excess requests wait for a pooled connection instead of opening new ones.
    return create_engine(
        database_url,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_pre_ping=True,
        echo=config.DB_ECHO,
    )


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_appointment_schema_checked = False
_chat_history_schema_checked = False


def ensure_appointment_schema() -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    with _schema_lock:
        if _appointment_schema_checked:
            return

        inspector = inspect(engine)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('appointments')}
        migration_steps = [
            ('status', "ALTER TABLE appointments ADD COLUMN status VARCHAR(20) DEFAULT 'scheduled'"),
            ('created_at', 'ALTER TABLE appointments ADD COLUMN created_at TIMESTAMP'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))

        existing_indexes = {index['name'] for index in inspector.get_indexes('appointments')}
        index_steps = [
            (
                'idx_appointments_doctor_date',
                'CREATE INDEX idx_appointments_doctor_date ON appointments(doctor_id, appointment_date, status)',
            ),
            (
                'idx_appointments_patient_email',
                'CREATE INDEX idx_appointments_patient_email ON appointments(patient_email)',
            ),
        ]

        with engine.begin() as connection:
            for index_name, statement in index_steps:
                if index_name not in existing_indexes:
                    connection.execute(text(statement))

        _appointment_schema_checked = True


def ensure_chat_history_schema() -> None:
    global _chat_history_schema_checked

    if _chat_history_schema_checked:
        return

    with _schema_lock:
        if _chat_history_schema_checked:
            return

        inspector = inspect(engine)

        if 'chat_history' not in inspector.get_table_names():
            _chat_history_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('chat_history')}
        migration_steps = [
            ('is_correct', 'ALTER TABLE chat_history ADD COLUMN is_correct BOOLEAN'),
            ('created_at', 'ALTER TABLE chat_history ADD COLUMN created_at TIMESTAMP'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))

        _chat_history_schema_checked = True


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
