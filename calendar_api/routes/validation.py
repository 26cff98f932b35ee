"""Field checks and wire-format parsing for incoming requests.

Format problems surface as pydantic errors (``date_format`` / ``time_format``)
so the request-validation handler can name the offending field. Missing or
semantically invalid values raise SlotValidationError.
"""

import re
from datetime import date, datetime, time

from pydantic_core import PydanticCustomError

from calendar_api.core.errors import SlotValidationError

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M'
DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}')
TIME_PATTERN = re.compile(r'\d{2}:\d{2}')


def today() -> date:
    return date.today()


def parse_date(value):
    if value is None or isinstance(value, date):
        return value

    if isinstance(value, str) and DATE_PATTERN.fullmatch(value.strip()):
        try:
            return datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError:
            pass

    raise PydanticCustomError('date_format', 'Invalid date format, expected yyyy-MM-dd')


def parse_time(value):
    if value is None or isinstance(value, time):
        return value

    if isinstance(value, str) and TIME_PATTERN.fullmatch(value.strip()):
        try:
            return datetime.strptime(value.strip(), TIME_FORMAT).time()
        except ValueError:
            pass

    raise PydanticCustomError('time_format', 'Invalid time format, expected HH:mm')


def normalize_text(value: str | None) -> str:
    return (value or '').strip()


def require_owner_id(owner_id: str | None) -> str:
    normalized = normalize_text(owner_id)
    if not normalized:
        raise SlotValidationError('ownerId is required')
    return normalized


def validate_availability_request(
    owner_id: str | None,
    slot_date: date | None,
    start_time: time | None,
    end_time: time | None,
    current_date: date,
) -> str:
    normalized_owner = require_owner_id(owner_id)

    if slot_date is None:
        raise SlotValidationError('date is required')

    if start_time is None or end_time is None:
        raise SlotValidationError('startTime and endTime are required')

    if start_time >= end_time:
        raise SlotValidationError('startTime must be before endTime')

    if slot_date < current_date:
        raise SlotValidationError('date cannot be in the past')

    return normalized_owner


def validate_booking_request(
    owner_id: str | None,
    slot_date: date | None,
    start_time: time | None,
    invitee_name: str | None,
    invitee_email: str | None,
) -> tuple[str, str, str]:
    normalized_owner = require_owner_id(owner_id)

    if slot_date is None or start_time is None:
        raise SlotValidationError('date and startTime are required')

    normalized_name = normalize_text(invitee_name)
    if not normalized_name:
        raise SlotValidationError('inviteeName is required')

    normalized_email = normalize_text(invitee_email).lower()
    if not normalized_email:
        raise SlotValidationError('inviteeEmail is required')

    return normalized_owner, normalized_name, normalized_email
