import logging

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from medisco.core import config
from medisco.database import Base, engine, ensure_appointment_schema, ensure_chat_history_schema, get_db
from medisco.middleware.log_middleware import LogMiddleware
from medisco.models import appointment, chat_history, department, doctor, faq  # noqa: F401
from medisco.routes import appointment_routes, chat_routes, department_routes, doctor_routes, faq_routes

app = FastAPI(title='Medisco Hospital Chatbot API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=config.CORS_ORIGINS != ['*'],
    allow_methods=['*'],
    allow_headers=['*'],
)
app.add_middleware(LogMiddleware)

logger = logging.getLogger(__name__)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={'error': str(exc)})


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
        ensure_chat_history_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': f'{config.HOSPITAL_NAME} Chatbot API Running'}


@app.get('/test-db')
def test_database(db: Session = Depends(get_db)):
    try:
        solution = db.execute(text('SELECT 1 + 1 AS solution')).scalar_one()
    except SQLAlchemyError as exc:
        logger.exception('Database connectivity check failed.')
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    return {'message': 'Database connection successful', 'solution': solution}


app.include_router(department_routes.router, prefix='/api/departments')
app.include_router(doctor_routes.router, prefix='/api/doctors')
app.include_router(appointment_routes.router, prefix='/api/appointments')
app.include_router(faq_routes.router, prefix='/api/faqs')
app.include_router(chat_routes.router, prefix='/api')
