"""In-memory store of committed appointments per owner and date."""

from datetime import date, time
from threading import Lock

from calendar_api.models.appointment import Appointment


class BookingLedger:
    """Owns, per (owner, date), the committed appointments keyed by slot start."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._appointments_by_owner: dict[str, dict[date, dict[time, Appointment]]] = {}

    def has_any(self, owner_id: str, slot_date: date) -> bool:
        with self._lock:
            return bool(self._appointments_by_owner.get(owner_id, {}).get(slot_date))

    def get(self, owner_id: str, slot_date: date, slot_start: time) -> Appointment | None:
        with self._lock:
            return self._appointments_by_owner.get(owner_id, {}).get(slot_date, {}).get(slot_start)

    def insert(self, owner_id: str, slot_date: date, slot_start: time, appointment: Appointment) -> None:
        # The caller has already confirmed the key is free.
        with self._lock:
            by_date = self._appointments_by_owner.setdefault(owner_id, {})
            by_date.setdefault(slot_date, {})[slot_start] = appointment

    def list_from(self, owner_id: str, cutoff: date) -> list[Appointment]:
        with self._lock:
            by_date = self._appointments_by_owner.get(owner_id, {})
            appointments = [
                appointment
                for slot_date, by_start in by_date.items()
                if slot_date >= cutoff
                for appointment in by_start.values()
            ]

        return sorted(appointments, key=lambda appointment: (appointment.date, appointment.start_time))

    def clear(self) -> None:
        with self._lock:
            self._appointments_by_owner.clear()
