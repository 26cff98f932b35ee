from fastapi import APIRouter, Depends, Query

from calendar_api.routes import validation
from calendar_api.routes.dependencies import get_engine
from calendar_api.routes.schemas import AppointmentResponse, BookAppointmentRequest, DaySlotsResponse
from calendar_api.scheduling.engine import SchedulingEngine

router = APIRouter(tags=['invitee'])


@router.get('/slots', response_model=list[DaySlotsResponse])
def search_slots(
    owner_id: str | None = Query(default=None, alias='ownerId'),
    engine: SchedulingEngine = Depends(get_engine),
):
    normalized_owner = validation.require_owner_id(owner_id)
    day_slots = engine.search_slots(normalized_owner)

    return [
        DaySlotsResponse(date=slot_date, available_start_times=times)
        for slot_date, times in day_slots
    ]


@router.post('/appointments', response_model=AppointmentResponse)
def book_appointment(data: BookAppointmentRequest, engine: SchedulingEngine = Depends(get_engine)):
    owner_id, invitee_name, invitee_email = validation.validate_booking_request(
        data.owner_id,
        data.slot_date,
        data.start_time,
        data.invitee_name,
        data.invitee_email,
    )
    appointment = engine.book_appointment(owner_id, data.slot_date, data.start_time, invitee_name, invitee_email)

    return AppointmentResponse.from_appointment(appointment)
