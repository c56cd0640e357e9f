# beachbbq/availability.py
from datetime import date
from typing import Iterable, List, Sequence

from beachbbq.catalog import TIME_SLOTS
from beachbbq.statuses import BookingStatus


def booked_units(bookings: Iterable, time_slot: str) -> int:
    """Units consumed in one slot. Cancelled bookings hold no capacity."""
    return sum(
        (booking.bbq_count or 1)
        for booking in bookings
        if booking.time_slot == time_slot and booking.status != BookingStatus.CANCELLED.value
    )


def calculate_availability(
    day: date,
    bookings: Iterable,
    max_units: int,
    time_slots: Sequence[str] = TIME_SLOTS,
) -> List[dict]:
    """
    Remaining capacity for every slot of `day`, in slot order.

    `available_units` is clamped at zero even when the day is oversubscribed;
    `booked_units` keeps the raw sum so oversubscription stays visible.
    A full slot points at the first later slot of the same day that still
    has capacity.
    """
    day_bookings = [booking for booking in bookings if booking.date == day]
    consumed = [booked_units(day_bookings, slot) for slot in time_slots]
    free = [max_units - used for used in consumed]

    slots = []
    for index, time_slot in enumerate(time_slots):
        next_slot = None
        if free[index] <= 0:
            next_slot = next(
                (time_slots[later] for later in range(index + 1, len(time_slots)) if free[later] > 0),
                None,
            )
        slots.append({
            "date": day,
            "time_slot": time_slot,
            "available_units": max(free[index], 0),
            "booked_units": consumed[index],
            # units coming back from the previous slot need their turnaround clean
            "is_cleaning_window": index > 0 and consumed[index - 1] > 0,
            "next_available_slot": next_slot,
        })
    return slots
