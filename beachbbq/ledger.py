# beachbbq/ledger.py
"""
Booking Ledger: the record of reservations and their three status axes.

`BookingLedger` holds every rule (slot and date validation, capacity policy,
status transitions, delivery timestamps). Storage comes from a subclass:
`SqlBookingLedger` below, or `memory.MemoryBookingLedger` for a map-backed
store. Both expose the same interface.
"""
import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from dateutil import parser
from sqlalchemy.orm import Session

from beachbbq import catalog, models
from beachbbq.availability import booked_units, calculate_availability
from beachbbq.config import settings
from beachbbq.database import transaction
from beachbbq.errors import CapacityExceededError, NotFoundError, ValidationError
from beachbbq.statuses import AXES, BookingStatus, DeliveryStatus, PaymentStatus, check_transition

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {
    "status",
    "payment_status",
    "delivery_status",
    "customer_name",
    "customer_phone",
    "time_slot",
    "date",
    "actual_start_time",
    "actual_end_time",
    "notes",
}
NULLABLE_FIELDS = {"actual_start_time", "actual_end_time", "notes"}


def parse_day(value) -> date:
    """Calendar day of an ISO date or datetime string, taken as written."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("A reservation date is required")
    try:
        return parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date '{value}'. Use an ISO date such as 2025-06-01")


def check_time_slot(time_slot: str) -> str:
    if time_slot not in catalog.TIME_SLOTS:
        raise ValidationError(
            f"Invalid time slot '{time_slot}'. Expected one of: {', '.join(catalog.TIME_SLOTS)}"
        )
    return time_slot


def _sort_key(booking):
    return (booking.date, booking.id or 0)


class BookingLedger:
    def __init__(self, max_units: Optional[int] = None, allow_overbooking: Optional[bool] = None):
        self.max_units = settings.MAX_UNITS if max_units is None else max_units
        self.allow_overbooking = settings.ALLOW_OVERBOOKING if allow_overbooking is None else allow_overbooking

    # Storage hooks
    def _atomic(self):
        raise NotImplementedError

    def _add(self, booking: models.Booking):
        raise NotImplementedError

    def _find(self, booking_id: int) -> Optional[models.Booking]:
        raise NotImplementedError

    def _all(self) -> List[models.Booking]:
        raise NotImplementedError

    def _discard(self, booking: models.Booking):
        raise NotImplementedError

    def _on(self, day: date) -> List[models.Booking]:
        return [booking for booking in self._all() if booking.date == day]

    # Operations
    def create(
        self,
        draft,
        user,
        affiliate_link_id: Optional[int] = None,
        on_created: Optional[Callable[[models.Booking], None]] = None,
    ) -> models.Booking:
        """Store a new booking. `on_created` runs inside the same transaction, after the id is assigned."""
        day = parse_day(draft.date)
        time_slot = check_time_slot(draft.time_slot)
        if catalog.get_location(draft.location_id) is None:
            raise ValidationError(f"Unknown location {draft.location_id}")
        if catalog.get_package(draft.package_id) is None:
            raise ValidationError(f"Unknown package {draft.package_id}")

        bbq_count = 1 if draft.bbq_count is None else draft.bbq_count
        if bbq_count < 1:
            raise ValidationError("bbqCount must be at least 1")

        cleanup_amount = None
        if draft.cleanup_contribution:
            cleanup_amount = catalog.CLEANUP_AMOUNT if draft.cleanup_amount is None else draft.cleanup_amount
            if cleanup_amount <= 0:
                raise ValidationError("cleanupAmount must be positive")

        now = datetime.utcnow()
        booking = models.Booking(
            user_id=user.id,
            location_id=draft.location_id,
            package_id=draft.package_id,
            customer_name=draft.customer_name or user.username,
            customer_phone=draft.customer_phone or user.phone,
            date=day,
            time_slot=time_slot,
            status=BookingStatus.PENDING.value,
            payment_status=PaymentStatus.UNPAID.value,
            delivery_status=DeliveryStatus.SCHEDULED.value,
            bbq_count=bbq_count,
            actual_start_time=None,
            actual_end_time=None,
            cleanup_contribution=bool(draft.cleanup_contribution),
            cleanup_amount=cleanup_amount,
            assigned_bbq_id=None,
            affiliate_link_id=affiliate_link_id,
            commission_paid=False,
            notes=draft.notes,
            created_at=now,
            updated_at=now,
        )

        with self._atomic():
            if not self.allow_overbooking:
                self._check_capacity(day, time_slot, bbq_count)
            self._add(booking)
            if on_created is not None:
                try:
                    on_created(booking)
                except Exception:
                    self._discard(booking)
                    raise

        logger.info("Booking %s created for user %s on %s %s (%s BBQ)",
                    booking.id, user.id, day.isoformat(), time_slot, bbq_count)
        return booking

    def get(self, booking_id: int) -> models.Booking:
        booking = self._find(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    def list_by_user(self, user_id: int) -> List[models.Booking]:
        return sorted((b for b in self._all() if b.user_id == user_id), key=_sort_key)

    def list_all(self) -> List[models.Booking]:
        return sorted(self._all(), key=_sort_key)

    def bookings_on(self, day) -> List[models.Booking]:
        return self._on(parse_day(day))

    def availability(self, day) -> List[dict]:
        day = parse_day(day)
        return calculate_availability(day, self._on(day), self.max_units)

    def list_deliveries(self) -> List[models.Booking]:
        waiting = {DeliveryStatus.SCHEDULED.value, DeliveryStatus.IN_TRANSIT.value}
        return [
            booking for booking in self.list_all()
            if booking.status == BookingStatus.CONFIRMED.value and booking.delivery_status in waiting
        ]

    def list_pickups(self) -> List[models.Booking]:
        return [b for b in self.list_all() if b.delivery_status == DeliveryStatus.DELIVERED.value]

    def update(self, booking_id: int, changes: dict) -> models.Booking:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        with self._atomic():
            booking = self.get(booking_id)
            values = self._validated_changes(booking, changes)
            for field, value in values.items():
                setattr(booking, field, value)
            booking.updated_at = datetime.utcnow()

        logger.info("Booking %s updated: %s", booking_id, ", ".join(sorted(values)))
        return booking

    def _validated_changes(self, booking: models.Booking, changes: dict) -> dict:
        values = {}
        for field, value in changes.items():
            if value is None and field not in NULLABLE_FIELDS:
                raise ValidationError(f"{field} cannot be null")
            values[field] = value

        for axis in AXES:
            if axis in values:
                values[axis] = check_transition(axis, getattr(booking, axis), values[axis]).value

        if "time_slot" in values:
            check_time_slot(values["time_slot"])
        if "date" in values:
            values["date"] = parse_day(values["date"])

        day = values.get("date", booking.date)
        time_slot = values.get("time_slot", booking.time_slot)
        moved = day != booking.date or time_slot != booking.time_slot
        if moved and not self.allow_overbooking and values.get("status", booking.status) != BookingStatus.CANCELLED.value:
            self._check_capacity(day, time_slot, booking.bbq_count, exclude_id=booking.id)

        now = datetime.utcnow()
        delivery = values.get("delivery_status")
        if delivery is not None and delivery != booking.delivery_status:
            if delivery == DeliveryStatus.IN_TRANSIT.value:
                if values.get("actual_start_time") is None and booking.actual_start_time is None:
                    values["actual_start_time"] = now
            elif delivery == DeliveryStatus.DELIVERED.value:
                if values.get("actual_end_time") is None:
                    values["actual_end_time"] = now
        return values

    def _check_capacity(self, day: date, time_slot: str, bbq_count: int, exclude_id: Optional[int] = None):
        others = [booking for booking in self._on(day) if exclude_id is None or booking.id != exclude_id]
        free = self.max_units - booked_units(others, time_slot)
        if bbq_count > free:
            logger.warning("Rejected %s BBQ for %s %s: %s left", bbq_count, day.isoformat(), time_slot, max(free, 0))
            raise CapacityExceededError(
                f"Only {max(free, 0)} BBQ(s) left for {time_slot} on {day.isoformat()}"
            )


class SqlBookingLedger(BookingLedger):
    def __init__(self, db: Session, **kwargs):
        super().__init__(**kwargs)
        self.db = db

    def _atomic(self):
        return transaction(self.db)

    def _add(self, booking):
        self.db.add(booking)
        self.db.flush()

    def _discard(self, booking):
        # the rollback of the surrounding transaction drops the row
        pass

    def _find(self, booking_id):
        return self.db.query(models.Booking).filter(models.Booking.id == booking_id).first()

    def _all(self):
        return self.db.query(models.Booking).order_by(models.Booking.date, models.Booking.id).all()

    def _on(self, day):
        return self.db.query(models.Booking).filter(models.Booking.date == day).order_by(models.Booking.id).all()

    def list_by_user(self, user_id):
        return self.db.query(models.Booking).filter(
            models.Booking.user_id == user_id
        ).order_by(models.Booking.date, models.Booking.id).all()
