from datetime import time

import pytest

from calendar_api.scheduling.slots import ceil_to_hour, floor_to_hour, generate_slots, slot_end


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (time(10, 0), time(10, 0)),
        (time(10, 1), time(11, 0)),
        (time(10, 59, 59), time(11, 0)),
        (time(10, 0, 0, 1), time(11, 0)),
        (time(0, 30), time(1, 0)),
    ],
)
def test_ceil_to_hour(value: time, expected: time) -> None:
    assert ceil_to_hour(value) == expected


def test_ceil_to_hour_returns_none_past_last_hour_of_day() -> None:
    assert ceil_to_hour(time(23, 30)) is None
    assert ceil_to_hour(time(23, 0)) == time(23, 0)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (time(10, 59), time(10, 0)),
        (time(10, 0), time(10, 0)),
        (time(10, 59, 59, 999999), time(10, 0)),
    ],
)
def test_floor_to_hour(value: time, expected: time) -> None:
    assert floor_to_hour(value) == expected


def test_generate_slots_rounds_window_inward() -> None:
    assert generate_slots(time(9, 15), time(12, 45)) == [time(10, 0), time(11, 0)]


def test_generate_slots_includes_slot_ending_on_window_end() -> None:
    assert generate_slots(time(9, 0), time(12, 0)) == [time(9, 0), time(10, 0), time(11, 0)]


@pytest.mark.parametrize(
    ('start', 'end'),
    [
        (time(9, 15), time(9, 45)),
        (time(9, 30), time(10, 30)),
        (time(12, 0), time(11, 0)),
        (time(23, 15), time(23, 59)),
    ],
)
def test_generate_slots_is_empty_without_full_hour(start: time, end: time) -> None:
    assert generate_slots(start, end) == []


def test_generate_slots_covers_late_evening() -> None:
    assert generate_slots(time(21, 0), time(23, 59)) == [time(21, 0), time(22, 0)]


def test_slot_end_is_one_hour_later() -> None:
    assert slot_end(time(10, 0)) == time(11, 0)
    assert slot_end(time(22, 0)) == time(23, 0)
