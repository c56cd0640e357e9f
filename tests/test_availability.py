from datetime import date
from types import SimpleNamespace

from beachbbq.availability import booked_units, calculate_availability
from beachbbq.catalog import TIME_SLOTS

DAY = date(2025, 6, 1)


def booking(time_slot, bbq_count=1, status="pending", day=DAY):
    return SimpleNamespace(date=day, time_slot=time_slot, bbq_count=bbq_count, status=status)


def by_slot(slots):
    return {slot["time_slot"]: slot for slot in slots}


def test_empty_day_has_full_capacity_everywhere():
    slots = calculate_availability(DAY, [], max_units=5)

    assert [slot["time_slot"] for slot in slots] == list(TIME_SLOTS)
    for slot in slots:
        assert slot["available_units"] == 5
        assert slot["booked_units"] == 0
        assert slot["next_available_slot"] is None
        assert slot["is_cleaning_window"] is False


def test_available_units_is_pool_minus_booked_count():
    bookings = [booking("09:00-12:00", 2), booking("09:00-12:00", 1), booking("17:00-20:00", 4)]

    slots = by_slot(calculate_availability(DAY, bookings, max_units=5))

    assert slots["09:00-12:00"]["available_units"] == 2
    assert slots["13:00-16:00"]["available_units"] == 5
    assert slots["17:00-20:00"]["available_units"] == 1


def test_full_slot_points_to_next_slot_with_capacity():
    bookings = [booking("09:00-12:00", 5), booking("13:00-16:00", 5)]

    slots = by_slot(calculate_availability(DAY, bookings, max_units=5))

    assert slots["09:00-12:00"]["next_available_slot"] == "17:00-20:00"
    assert slots["13:00-16:00"]["next_available_slot"] == "17:00-20:00"
    assert slots["17:00-20:00"]["next_available_slot"] is None


def test_last_slot_full_does_not_look_into_the_next_day():
    slots = by_slot(calculate_availability(DAY, [booking("17:00-20:00", 5)], max_units=5))

    assert slots["17:00-20:00"]["available_units"] == 0
    assert slots["17:00-20:00"]["next_available_slot"] is None


def test_oversubscribed_slot_is_clamped_at_zero():
    bookings = [booking("09:00-12:00", 4), booking("09:00-12:00", 3)]

    slot = by_slot(calculate_availability(DAY, bookings, max_units=5))["09:00-12:00"]

    assert slot["available_units"] == 0
    assert slot["booked_units"] == 7


def test_cancelled_bookings_release_capacity():
    bookings = [booking("09:00-12:00", 3, status="cancelled"), booking("09:00-12:00", 1)]

    assert booked_units(bookings, "09:00-12:00") == 1


def test_bookings_on_other_days_are_ignored():
    bookings = [booking("09:00-12:00", 5, day=date(2025, 6, 2))]

    slot = by_slot(calculate_availability(DAY, bookings, max_units=5))["09:00-12:00"]

    assert slot["available_units"] == 5


def test_slot_after_a_used_slot_is_a_cleaning_window():
    slots = by_slot(calculate_availability(DAY, [booking("09:00-12:00")], max_units=5))

    assert slots["09:00-12:00"]["is_cleaning_window"] is False
    assert slots["13:00-16:00"]["is_cleaning_window"] is True
    assert slots["17:00-20:00"]["is_cleaning_window"] is False
