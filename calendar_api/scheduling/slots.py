"""Hour-aligned slot generation for availability windows."""

from datetime import datetime, time, timedelta

APPOINTMENT_MINUTES = 60
SLOT_DURATION = timedelta(minutes=APPOINTMENT_MINUTES)

# Any fixed date works; slot arithmetic only needs wall-clock offsets.
_ANCHOR_DATE = datetime(2000, 1, 1).date()


def is_on_hour(value: time) -> bool:
    return value.minute == 0 and value.second == 0 and value.microsecond == 0


def floor_to_hour(value: time) -> time:
    return value.replace(minute=0, second=0, microsecond=0)


def ceil_to_hour(value: time) -> time | None:
    """Round up to the next hour boundary.

    Returns None when the next boundary would be midnight of the following
    day, since no slot can start inside the window in that case.
    """
    if is_on_hour(value):
        return value

    if value.hour == 23:
        return None

    return floor_to_hour(value).replace(hour=value.hour + 1)


def slot_end(start: time) -> time:
    # Generated slots never start later than 22:00, so this stays on the same day.
    return (datetime.combine(_ANCHOR_DATE, start) + SLOT_DURATION).time()


def generate_slots(start_inclusive: time, end_exclusive: time) -> list[time]:
    rounded_start = ceil_to_hour(start_inclusive)
    rounded_end = floor_to_hour(end_exclusive)
    slots: list[time] = []

    if rounded_start is None or rounded_start >= rounded_end:
        return slots

    current = datetime.combine(_ANCHOR_DATE, rounded_start)
    window_end = datetime.combine(_ANCHOR_DATE, rounded_end)

    while current + SLOT_DURATION <= window_end:
        slots.append(current.time())
        current += SLOT_DURATION

    return slots
