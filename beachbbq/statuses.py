# beachbbq/statuses.py
"""
Status axes for bookings and equipment.

Booking, payment and delivery status evolve independently; each axis has its
own table of allowed transitions which `check_transition` enforces on every
update. Equipment status is owned by the registry (see equipment.py).
"""
import enum

from beachbbq.errors import InvalidTransitionError, ValidationError


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    REFUNDED = "refunded"


class DeliveryStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    COLLECTED = "collected"


class EquipmentStatus(str, enum.Enum):
    AVAILABLE = "available"
    IN_USE = "in_use"
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"
    TRANSIT_DELIVERY = "transit_delivery"
    TRANSIT_PICKUP = "transit_pickup"


class CommissionStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSED = "processed"


BOOKING_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}

PAYMENT_TRANSITIONS = {
    PaymentStatus.UNPAID: {PaymentStatus.PAID},
    PaymentStatus.PAID: {PaymentStatus.REFUNDED},
    PaymentStatus.REFUNDED: set(),
}

DELIVERY_TRANSITIONS = {
    DeliveryStatus.SCHEDULED: {DeliveryStatus.IN_TRANSIT},
    DeliveryStatus.IN_TRANSIT: {DeliveryStatus.DELIVERED},
    DeliveryStatus.DELIVERED: {DeliveryStatus.COLLECTED},
    DeliveryStatus.COLLECTED: set(),
}

# Axis name -> (enum, transition table)
AXES = {
    "status": (BookingStatus, BOOKING_TRANSITIONS),
    "payment_status": (PaymentStatus, PAYMENT_TRANSITIONS),
    "delivery_status": (DeliveryStatus, DELIVERY_TRANSITIONS),
}


def parse_status(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {enum_cls.__name__} '{value}'. Expected one of: {allowed}")


def check_transition(axis: str, current, requested):
    """Return the parsed target status, or raise if the move is not allowed.

    Re-applying the current value is accepted as a no-op.
    """
    enum_cls, table = AXES[axis]
    current = enum_cls(current)
    target = parse_status(enum_cls, requested)
    if target != current and target not in table[current]:
        raise InvalidTransitionError(axis, current.value, target.value)
    return target
