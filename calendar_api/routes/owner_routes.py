import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from calendar_api.core.errors import SchedulingError
from calendar_api.routes import validation
from calendar_api.routes.dependencies import get_engine
from calendar_api.routes.schemas import AppointmentResponse, AvailabilityRuleRequest, AvailabilityRuleResponse
from calendar_api.scheduling.engine import SchedulingEngine

router = APIRouter(tags=['owner'])

logger = logging.getLogger(__name__)

AVAILABILITY_SET_MESSAGE = 'Availability set successfully'
AVAILABILITY_FAILED_MESSAGE = 'Something went wrong, Availability set failed'


def availability_response(code: int, message: str) -> JSONResponse:
    body = AvailabilityRuleResponse(code=code, message=message)
    return JSONResponse(status_code=code, content=body.model_dump())


@router.post('/availability', response_model=AvailabilityRuleResponse)
def set_availability(data: AvailabilityRuleRequest, engine: SchedulingEngine = Depends(get_engine)):
    try:
        owner_id = validation.validate_availability_request(
            data.owner_id,
            data.slot_date,
            data.start_time,
            data.end_time,
            current_date=validation.today(),
        )
        engine.set_availability(owner_id, data.slot_date, data.start_time, data.end_time)
    except SchedulingError as exc:
        return availability_response(exc.status_code, exc.message)
    except Exception:
        logger.exception('Unexpected failure while setting availability for owner=%s', data.owner_id)
        return availability_response(status.HTTP_500_INTERNAL_SERVER_ERROR, AVAILABILITY_FAILED_MESSAGE)

    return availability_response(status.HTTP_200_OK, AVAILABILITY_SET_MESSAGE)


@router.get('/appointments', response_model=list[AppointmentResponse])
def list_appointments(
    owner_id: str | None = Query(default=None, alias='ownerId'),
    engine: SchedulingEngine = Depends(get_engine),
):
    normalized_owner = validation.require_owner_id(owner_id)
    appointments = engine.list_upcoming(normalized_owner, validation.today())

    return [AppointmentResponse.from_appointment(appointment) for appointment in appointments]
