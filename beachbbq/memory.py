# beachbbq/memory.py
"""
Map-backed Booking Ledger and Equipment Registry.

No durability across restarts. Ledger and registry built on the same
`MemoryStore` share one re-entrant lock, so an assign or release never
exposes a unit and a booking that disagree.
"""
import itertools
import threading

from beachbbq.equipment import EquipmentRegistry
from beachbbq.ledger import BookingLedger


class MemoryStore:
    def __init__(self):
        self.lock = threading.RLock()
        self.bookings = {}
        self.equipment = {}
        self.booking_ids = itertools.count(1)
        self.equipment_ids = itertools.count(1)


class MemoryBookingLedger(BookingLedger):
    def __init__(self, store: MemoryStore = None, **kwargs):
        super().__init__(**kwargs)
        self.store = store or MemoryStore()

    def _atomic(self):
        return self.store.lock

    def _add(self, booking):
        booking.id = next(self.store.booking_ids)
        self.store.bookings[booking.id] = booking

    def _discard(self, booking):
        self.store.bookings.pop(booking.id, None)

    def _find(self, booking_id):
        with self.store.lock:
            return self.store.bookings.get(booking_id)

    def _all(self):
        with self.store.lock:
            return list(self.store.bookings.values())


class MemoryEquipmentRegistry(EquipmentRegistry):
    def __init__(self, ledger: MemoryBookingLedger = None):
        super().__init__(ledger or MemoryBookingLedger())
        self.store = self.ledger.store

    def _add(self, unit):
        unit.id = next(self.store.equipment_ids)
        self.store.equipment[unit.id] = unit

    def _find(self, unit_id):
        with self.store.lock:
            return self.store.equipment.get(unit_id)

    def _all(self):
        with self.store.lock:
            return list(self.store.equipment.values())
