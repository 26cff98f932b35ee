import logging
from datetime import datetime
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from calendar_api.core import config
from calendar_api.core.errors import SchedulingError, SlotValidationError
from calendar_api.routes import invitee_routes, owner_routes
from calendar_api.scheduling.engine import SchedulingEngine

API_BASE = '/api'

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=config.CORS_ALLOW_CREDENTIALS,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_engine() -> None:
    logging.basicConfig(level=config.LOG_LEVEL)
    config.validate_runtime_config()
    app.state.engine = SchedulingEngine()
    logger.info('Scheduling engine started (env=%s)', config.APP_ENV)


@app.on_event('shutdown')
def shutdown_engine() -> None:
    engine = getattr(app.state, 'engine', None)
    if engine is not None:
        engine.close()
        logger.info('Scheduling engine stopped')


def build_error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            'timestamp': datetime.now().isoformat(),
            'status': status_code,
            'error': HTTPStatus(status_code).phrase,
            'message': message,
            'type': error_type,
        },
    )


def describe_request_error(exc: RequestValidationError) -> str:
    for error in exc.errors():
        location = error.get('loc') or ()
        field = location[-1] if len(location) > 1 else ''

        if error.get('type') == 'date_format':
            if not field:
                return 'Invalid date format, expected yyyy-MM-dd'
            return f"Invalid format for '{field}', expected yyyy-MM-dd"

        if error.get('type') == 'time_format':
            if not field:
                return 'Invalid time format, expected HH:mm'
            return f"Invalid format for '{field}', expected HH:mm"

    return 'Incorrect request body'


@app.exception_handler(SchedulingError)
async def handle_scheduling_error(request: Request, exc: SchedulingError) -> JSONResponse:
    return build_error_response(exc.status_code, exc.message, type(exc).__name__)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return build_error_response(
        status.HTTP_400_BAD_REQUEST,
        describe_request_error(exc),
        SlotValidationError.__name__,
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return build_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        'Something went wrong, please try again later',
        type(exc).__name__,
    )


@app.get('/')
def root():
    return {'status': 'Calendar Booking API Running'}


app.include_router(owner_routes.router, prefix=f'{API_BASE}/owner')
app.include_router(invitee_routes.router, prefix=f'{API_BASE}/invitee')
