from datetime import date, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from calendar_api.models.appointment import Appointment
from calendar_api.routes.validation import TIME_FORMAT, parse_date, parse_time


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AvailabilityRuleRequest(CamelModel):
    owner_id: str | None = None
    slot_date: date | None = Field(default=None, alias='date')
    start_time: time | None = None
    end_time: time | None = None

    @field_validator('slot_date', mode='before')
    @classmethod
    def validate_date(cls, value):
        return parse_date(value)

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def validate_times(cls, value):
        return parse_time(value)


class AvailabilityRuleResponse(BaseModel):
    code: int
    message: str


class BookAppointmentRequest(CamelModel):
    owner_id: str | None = None
    slot_date: date | None = Field(default=None, alias='date')
    start_time: time | None = None
    invitee_name: str | None = None
    invitee_email: str | None = None

    @field_validator('slot_date', mode='before')
    @classmethod
    def validate_date(cls, value):
        return parse_date(value)

    @field_validator('start_time', mode='before')
    @classmethod
    def validate_start_time(cls, value):
        return parse_time(value)


class DaySlotsResponse(CamelModel):
    date: date
    available_start_times: list[time]

    @field_serializer('available_start_times')
    def serialize_times(self, value: list[time]) -> list[str]:
        return [slot.strftime(TIME_FORMAT) for slot in value]


class AppointmentResponse(CamelModel):
    id: UUID
    owner_id: str
    date: date
    start_time: time
    end_time: time
    invitee_name: str
    invitee_email: str

    @field_serializer('start_time', 'end_time')
    def serialize_time(self, value: time) -> str:
        return value.strftime(TIME_FORMAT)

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> 'AppointmentResponse':
        return cls(**appointment.model_dump())
