"""Appointment model definitions."""

from datetime import date, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class Appointment(BaseModel):
    """Represents a committed one-hour booking."""
    model_config = ConfigDict(frozen=True)

    id: UUID
    owner_id: str
    date: date
    start_time: time
    end_time: time
    invitee_name: str
    invitee_email: str
