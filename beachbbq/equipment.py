# beachbbq/equipment.py
"""
Equipment Registry: the physical BBQ units and their status.

Normal cycle is available -> in_use -> cleaning -> available, with
maintenance and the two transit states set by admins. A unit linked to a
booking (`current_booking_id`) is mirrored on the booking
(`assigned_bbq_id`); both sides always change inside one ledger transaction.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from beachbbq import models
from beachbbq.errors import (
    ConflictError,
    EquipmentUnavailableError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from beachbbq.ledger import BookingLedger, SqlBookingLedger
from beachbbq.statuses import BookingStatus, EquipmentStatus, parse_status

logger = logging.getLogger(__name__)

# States a unit can be released from (it is out with a customer)
RELEASABLE = {
    EquipmentStatus.IN_USE,
    EquipmentStatus.TRANSIT_DELIVERY,
    EquipmentStatus.TRANSIT_PICKUP,
}
# States in which a unit no longer belongs to any booking
UNLINKED = {
    EquipmentStatus.AVAILABLE,
    EquipmentStatus.CLEANING,
    EquipmentStatus.MAINTENANCE,
}


class EquipmentRegistry:
    def __init__(self, ledger: BookingLedger):
        self.ledger = ledger

    # Storage hooks; the transaction is the ledger's so booking and unit commit together
    def _atomic(self):
        return self.ledger._atomic()

    def _add(self, unit: models.BBQEquipment):
        raise NotImplementedError

    def _find(self, unit_id: int) -> Optional[models.BBQEquipment]:
        raise NotImplementedError

    def _all(self) -> List[models.BBQEquipment]:
        raise NotImplementedError

    def create_unit(self, name: str, model: Optional[str] = None, notes: Optional[str] = None) -> models.BBQEquipment:
        if not name or not name.strip():
            raise ValidationError("Equipment name is required")
        now = datetime.utcnow()
        unit = models.BBQEquipment(
            name=name.strip(),
            model=model,
            status=EquipmentStatus.AVAILABLE.value,
            current_booking_id=None,
            last_cleaned=None,
            last_maintenance=None,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        with self._atomic():
            self._add(unit)
        logger.info("BBQ unit %s (%s) registered", unit.id, unit.name)
        return unit

    def ensure_pool(self, size: int) -> List[models.BBQEquipment]:
        """Register `size` units when the registry is still empty."""
        if self._all():
            return []
        return [self.create_unit(f"BBQ Unit {number}", model="Standard Grill") for number in range(1, size + 1)]

    def get(self, unit_id: int) -> models.BBQEquipment:
        unit = self._find(unit_id)
        if unit is None:
            raise NotFoundError("BBQ equipment", unit_id)
        return unit

    def list_all(self) -> List[models.BBQEquipment]:
        return sorted(self._all(), key=lambda unit: unit.id)

    def list_available(self) -> List[models.BBQEquipment]:
        return [unit for unit in self.list_all() if unit.status == EquipmentStatus.AVAILABLE.value]

    def assign(self, unit_id: int, booking_id: int) -> models.BBQEquipment:
        with self._atomic():
            unit = self.get(unit_id)
            if unit.status != EquipmentStatus.AVAILABLE.value:
                logger.warning("Refused to assign BBQ %s in status %s", unit_id, unit.status)
                raise EquipmentUnavailableError(f"BBQ {unit_id} is {unit.status}, not available")

            booking = self.ledger.get(booking_id)
            if booking.status in (BookingStatus.CANCELLED.value, BookingStatus.COMPLETED.value):
                raise ConflictError(f"Booking {booking_id} is {booking.status}")
            if booking.assigned_bbq_id is not None:
                raise ConflictError(f"Booking {booking_id} already has BBQ {booking.assigned_bbq_id}")

            now = datetime.utcnow()
            unit.status = EquipmentStatus.IN_USE.value
            unit.current_booking_id = booking.id
            unit.updated_at = now
            booking.assigned_bbq_id = unit.id
            booking.updated_at = now

        logger.info("BBQ %s assigned to booking %s", unit_id, booking_id)
        return unit

    def release(self, unit_id: int) -> models.BBQEquipment:
        with self._atomic():
            unit = self.get(unit_id)
            current = EquipmentStatus(unit.status)
            if current == EquipmentStatus.CLEANING:
                return unit
            if current not in RELEASABLE:
                raise InvalidTransitionError("equipment status", current.value, EquipmentStatus.CLEANING.value)

            self._unlink(unit)
            unit.status = EquipmentStatus.CLEANING.value
            unit.updated_at = datetime.utcnow()

        logger.info("BBQ %s released for cleaning", unit_id)
        return unit

    def update_status(self, unit_id: int, status: str, notes: Optional[str] = None) -> models.BBQEquipment:
        target = parse_status(EquipmentStatus, status)

        with self._atomic():
            unit = self.get(unit_id)
            current = EquipmentStatus(unit.status)
            # Back to in_use only for a unit still linked to its booking (e.g. after delivery)
            if target == EquipmentStatus.IN_USE and unit.current_booking_id is None:
                raise ValidationError("A BBQ is put in use by assigning it to a booking")

            now = datetime.utcnow()
            if target == EquipmentStatus.AVAILABLE and current == EquipmentStatus.CLEANING:
                unit.last_cleaned = now
            if target == EquipmentStatus.MAINTENANCE and current != EquipmentStatus.MAINTENANCE:
                unit.last_maintenance = now
            if target in UNLINKED:
                self._unlink(unit)

            unit.status = target.value
            if notes is not None:
                unit.notes = notes
            unit.updated_at = now

        logger.info("BBQ %s status %s -> %s", unit_id, current.value, target.value)
        return unit

    def _unlink(self, unit: models.BBQEquipment):
        if unit.current_booking_id is None:
            return
        booking = self.ledger._find(unit.current_booking_id)
        if booking is not None and booking.assigned_bbq_id == unit.id:
            booking.assigned_bbq_id = None
            booking.updated_at = datetime.utcnow()
        unit.current_booking_id = None


class SqlEquipmentRegistry(EquipmentRegistry):
    def __init__(self, db: Session, ledger: Optional[SqlBookingLedger] = None):
        super().__init__(ledger or SqlBookingLedger(db))
        self.db = db

    def _add(self, unit):
        self.db.add(unit)
        self.db.flush()

    def _find(self, unit_id):
        return self.db.query(models.BBQEquipment).filter(models.BBQEquipment.id == unit_id).first()

    def _all(self):
        return self.db.query(models.BBQEquipment).order_by(models.BBQEquipment.id).all()
