import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from gobarber.core import config
from gobarber.database import Base, engine, ensure_appointment_schema, ensure_notification_schema
from gobarber.models import appointment, file, notification, user  # noqa: F401
from gobarber.routes import appointment_routes, notification_routes, schedule_routes
from gobarber.services.errors import ValidationError

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='GoBarber API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
        ensure_notification_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {'loc': list(error.get('loc', ())), 'msg': error.get('msg', '')}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': ValidationError.detail, 'errors': jsonable_errors(exc)},
    )


@app.get('/')
def root():
    return {'status': 'GoBarber API Running'}


app.include_router(appointment_routes.router, prefix='/appointments')
app.include_router(schedule_routes.router, prefix='/schedule')
app.include_router(notification_routes.router, prefix='/notifications')
