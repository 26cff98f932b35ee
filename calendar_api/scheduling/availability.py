"""In-memory store of bookable slot starts per owner and date."""

from collections.abc import Iterable
from datetime import date, time
from threading import Lock


class AvailabilityLedger:
    """Owns, per (owner, date), the set of slot starts that can still be booked.

    The internal lock only protects the dictionaries themselves. Sequences
    that span this ledger and the booking ledger are serialized by the
    scheduling engine.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._slots_by_owner: dict[str, dict[date, set[time]]] = {}

    def replace(self, owner_id: str, slot_date: date, slots: Iterable[time]) -> None:
        slot_set = set(slots)
        with self._lock:
            if not slot_set:
                owner_slots = self._slots_by_owner.get(owner_id)
                if owner_slots is not None:
                    owner_slots.pop(slot_date, None)
                    if not owner_slots:
                        del self._slots_by_owner[owner_id]
                return

            self._slots_by_owner.setdefault(owner_id, {})[slot_date] = slot_set

    def contains(self, owner_id: str, slot_date: date, slot_start: time) -> bool:
        with self._lock:
            return slot_start in self._slots_by_owner.get(owner_id, {}).get(slot_date, ())

    def remove(self, owner_id: str, slot_date: date, slot_start: time) -> None:
        with self._lock:
            self._slots_by_owner.get(owner_id, {}).get(slot_date, set()).discard(slot_start)

    def list_by_owner(self, owner_id: str) -> list[tuple[date, list[time]]]:
        with self._lock:
            owner_slots = self._slots_by_owner.get(owner_id, {})
            return [(slot_date, sorted(owner_slots[slot_date])) for slot_date in sorted(owner_slots)]

    def clear(self) -> None:
        with self._lock:
            self._slots_by_owner.clear()
