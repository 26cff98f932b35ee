"""Scheduling engine: the only entry point that mutates availability or bookings.

All ledger state is partitioned by ``(owner_id, date)``. Each partition has
its own lock. Publishing availability and booking a slot hold exactly one
partition lock for the whole check-then-write sequence, so the two can never
interleave on the same date while different dates never block each other.

Only publishing availability registers a partition. A booking for a date
that was never published finds no lock and is rejected without touching the
registry.

Reads touch a single ledger and go through that ledger's own lock. They see
the state either before or after a booking's insert/remove pair, never in
between, and they neither wait on each other nor hold up writers.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date, time
from threading import Lock
from uuid import UUID, uuid4

from calendar_api.core.errors import (
    AvailabilityConflictError,
    InternalSchedulingError,
    NoAvailabilityError,
    SchedulingError,
    SlotUnavailableError,
    SlotValidationError,
)
from calendar_api.models.appointment import Appointment
from calendar_api.scheduling.availability import AvailabilityLedger
from calendar_api.scheduling.bookings import BookingLedger
from calendar_api.scheduling.slots import ceil_to_hour, floor_to_hour, generate_slots, slot_end

logger = logging.getLogger(__name__)

ENGINE_CLOSED_MESSAGE = 'Scheduling engine is closed'


class SchedulingEngine:
    def __init__(self, id_factory: Callable[[], UUID] = uuid4) -> None:
        self.availability = AvailabilityLedger()
        self.bookings = BookingLedger()
        self._id_factory = id_factory
        self._registry_lock = Lock()
        self._partition_locks: dict[str, dict[date, Lock]] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def partition_count(self) -> int:
        with self._registry_lock:
            return sum(len(by_date) for by_date in self._partition_locks.values())

    def _ensure_open(self) -> None:
        if self._closed:
            raise InternalSchedulingError(ENGINE_CLOSED_MESSAGE)

    def _acquire_partition(self, owner_id: str, slot_date: date, register: bool) -> "Lock | None":
        with self._registry_lock:
            self._ensure_open()
            lock = self._partition_locks.get(owner_id, {}).get(slot_date)
            if lock is None:
                if not register:
                    return None
                lock = self._partition_locks.setdefault(owner_id, {}).setdefault(slot_date, Lock())

        lock.acquire()
        # close() may have run while this thread was waiting for the lock.
        if self._closed:
            lock.release()
            raise InternalSchedulingError(ENGINE_CLOSED_MESSAGE)
        return lock

    @contextmanager
    def _partition(self, owner_id: str, slot_date: date, register: bool = False) -> Iterator[bool]:
        """Hold the partition lock; yields False when the partition was never registered."""
        lock = self._acquire_partition(owner_id, slot_date, register)
        if lock is None:
            yield False
            return

        try:
            yield True
        finally:
            lock.release()

    def set_availability(self, owner_id: str, slot_date: date, raw_start: time, raw_end: time) -> list[time]:
        """Replace the owner's bookable slots for ``slot_date``.

        The window is rounded inward to whole hours first. Fails with
        SlotValidationError when no full slot fits, and with
        AvailabilityConflictError when the date already has a booking.
        """
        rounded_start = ceil_to_hour(raw_start)
        rounded_end = floor_to_hour(raw_end)

        if rounded_start is None or rounded_start >= rounded_end:
            raise SlotValidationError('No full 60-minute slots within provided window')

        try:
            with self._partition(owner_id, slot_date, register=True):
                if self.bookings.has_any(owner_id, slot_date):
                    raise AvailabilityConflictError(
                        'An appointment has already been booked for that date, you cannot modify '
                        'your availability, please select another date'
                    )

                slots = generate_slots(rounded_start, rounded_end)
                self.availability.replace(owner_id, slot_date, slots)
        except SchedulingError:
            raise
        except Exception as exc:
            logger.exception('Setting availability failed for owner=%s date=%s', owner_id, slot_date)
            raise InternalSchedulingError('Something went wrong, Availability set failed') from exc

        logger.info(
            'Availability set for owner=%s date=%s slots=%s',
            owner_id,
            slot_date,
            [slot.strftime('%H:%M') for slot in slots],
        )
        return slots

    def search_slots(self, owner_id: str) -> list[tuple[date, list[time]]]:
        self._ensure_open()
        day_slots = self.availability.list_by_owner(owner_id)

        if not day_slots:
            raise NoAvailabilityError(
                'No available Slots found, please check the availability for the given owner'
            )

        return day_slots

    def book_appointment(
        self,
        owner_id: str,
        slot_date: date,
        slot_start: time,
        invitee_name: str,
        invitee_email: str,
    ) -> Appointment:
        try:
            with self._partition(owner_id, slot_date) as published:
                if not published or not self.availability.contains(owner_id, slot_date, slot_start):
                    if published and self.bookings.get(owner_id, slot_date, slot_start) is not None:
                        reason = 'already booked'
                    else:
                        reason = 'never published'
                    logger.warning(
                        'Booking rejected for owner=%s date=%s start=%s: slot %s',
                        owner_id,
                        slot_date,
                        slot_start,
                        reason,
                    )
                    raise SlotUnavailableError(
                        'Selected time slot is not available, please select another time slot'
                    )

                appointment = Appointment(
                    id=self._id_factory(),
                    owner_id=owner_id,
                    date=slot_date,
                    start_time=slot_start,
                    end_time=slot_end(slot_start),
                    invitee_name=invitee_name,
                    invitee_email=invitee_email,
                )
                self.bookings.insert(owner_id, slot_date, slot_start, appointment)
                self.availability.remove(owner_id, slot_date, slot_start)
        except SchedulingError:
            raise
        except Exception as exc:
            logger.exception(
                'Booking failed for owner=%s date=%s start=%s', owner_id, slot_date, slot_start
            )
            raise InternalSchedulingError('Failed to book appointment') from exc

        logger.info('Appointment %s booked for owner=%s date=%s start=%s', appointment.id, owner_id, slot_date, slot_start)
        return appointment

    def list_upcoming(self, owner_id: str, as_of: date) -> list[Appointment]:
        self._ensure_open()
        return self.bookings.list_from(owner_id, as_of)

    def close(self) -> None:
        """Reject further operations, wait for in-flight writers, then drop all state."""
        with self._registry_lock:
            self._closed = True
            locks = [lock for by_date in self._partition_locks.values() for lock in by_date.values()]
            self._partition_locks.clear()

        for lock in locks:
            lock.acquire()
        try:
            self.availability.clear()
            self.bookings.clear()
        finally:
            for lock in locks:
                lock.release()
