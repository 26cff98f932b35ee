from datetime import date, time

import pytest
from pydantic import ValidationError

from calendar_api.core.errors import SlotValidationError
from calendar_api.routes.schemas import AvailabilityRuleRequest, BookAppointmentRequest
from calendar_api.routes.validation import (
    require_owner_id,
    validate_availability_request,
    validate_booking_request,
)

TODAY = date(2026, 1, 5)


def test_availability_request_parses_camel_case_fields() -> None:
    request = AvailabilityRuleRequest.model_validate(
        {'ownerId': 'owner-1', 'date': '2026-01-06', 'startTime': '09:15', 'endTime': '12:45'}
    )

    assert request.owner_id == 'owner-1'
    assert request.slot_date == date(2026, 1, 6)
    assert request.start_time == time(9, 15)
    assert request.end_time == time(12, 45)


def test_availability_request_allows_missing_fields() -> None:
    request = AvailabilityRuleRequest.model_validate({})

    assert request.owner_id is None
    assert request.slot_date is None


@pytest.mark.parametrize(
    ('payload', 'error_type'),
    [
        ({'date': '06-01-2026'}, 'date_format'),
        ({'date': '2026-02-30'}, 'date_format'),
        ({'date': 20260106}, 'date_format'),
        ({'startTime': '9am'}, 'time_format'),
        ({'endTime': '25:00'}, 'time_format'),
        ({'startTime': '09:00:00'}, 'time_format'),
    ],
)
def test_availability_request_rejects_malformed_values(payload: dict, error_type: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        AvailabilityRuleRequest.model_validate(payload)

    assert exception_info.value.errors()[0]['type'] == error_type


def test_book_request_rejects_malformed_start_time() -> None:
    with pytest.raises(ValidationError) as exception_info:
        BookAppointmentRequest.model_validate({'startTime': '10.00'})

    error = exception_info.value.errors()[0]
    assert error['type'] == 'time_format'
    assert error['loc'] == ('startTime',)


@pytest.mark.parametrize('owner_id', [None, '', '   '])
def test_require_owner_id_rejects_blank(owner_id: str | None) -> None:
    with pytest.raises(SlotValidationError) as exception_info:
        require_owner_id(owner_id)

    assert exception_info.value.message == 'ownerId is required'


def test_require_owner_id_strips_whitespace() -> None:
    assert require_owner_id('  owner-1 ') == 'owner-1'


@pytest.mark.parametrize(
    ('owner_id', 'slot_date', 'start', 'end', 'error_detail'),
    [
        (None, TODAY, time(9, 0), time(10, 0), 'ownerId is required'),
        ('owner-1', None, time(9, 0), time(10, 0), 'date is required'),
        ('owner-1', TODAY, None, time(10, 0), 'startTime and endTime are required'),
        ('owner-1', TODAY, time(9, 0), None, 'startTime and endTime are required'),
        ('owner-1', TODAY, time(10, 0), time(10, 0), 'startTime must be before endTime'),
        ('owner-1', TODAY, time(11, 0), time(10, 0), 'startTime must be before endTime'),
        ('owner-1', date(2026, 1, 4), time(9, 0), time(10, 0), 'date cannot be in the past'),
    ],
)
def test_validate_availability_request_rejects_invalid_input(
    owner_id: str | None,
    slot_date: date | None,
    start: time | None,
    end: time | None,
    error_detail: str,
) -> None:
    with pytest.raises(SlotValidationError) as exception_info:
        validate_availability_request(owner_id, slot_date, start, end, current_date=TODAY)

    assert exception_info.value.message == error_detail
    assert exception_info.value.status_code == 400


def test_validate_availability_request_accepts_today() -> None:
    assert validate_availability_request(' owner-1 ', TODAY, time(9, 0), time(10, 0), current_date=TODAY) == 'owner-1'


@pytest.mark.parametrize(
    ('owner_id', 'slot_date', 'start', 'name', 'email', 'error_detail'),
    [
        ('  ', TODAY, time(9, 0), 'A', 'a@a.com', 'ownerId is required'),
        ('owner-1', None, time(9, 0), 'A', 'a@a.com', 'date and startTime are required'),
        ('owner-1', TODAY, None, 'A', 'a@a.com', 'date and startTime are required'),
        ('owner-1', TODAY, time(9, 0), ' ', 'a@a.com', 'inviteeName is required'),
        ('owner-1', TODAY, time(9, 0), 'A', None, 'inviteeEmail is required'),
    ],
)
def test_validate_booking_request_rejects_invalid_input(
    owner_id: str | None,
    slot_date: date | None,
    start: time | None,
    name: str | None,
    email: str | None,
    error_detail: str,
) -> None:
    with pytest.raises(SlotValidationError) as exception_info:
        validate_booking_request(owner_id, slot_date, start, name, email)

    assert exception_info.value.message == error_detail


def test_validate_booking_request_normalizes_fields() -> None:
    assert validate_booking_request(' owner-1 ', TODAY, time(9, 0), ' Test User ', ' TEST@EXAMPLE.COM ') == (
        'owner-1',
        'Test User',
        'test@example.com',
    )
