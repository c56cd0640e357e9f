from datetime import date, datetime
from decimal import Decimal

import pytest

from beachbbq.errors import CapacityExceededError, InvalidTransitionError, NotFoundError, ValidationError
from conftest import DAY, draft, make_store


def test_create_initializes_statuses_and_defaults(ledger, customer):
    booking = ledger.create(draft(), customer)

    assert booking.id is not None
    assert booking.status == "pending"
    assert booking.payment_status == "unpaid"
    assert booking.delivery_status == "scheduled"
    assert booking.bbq_count == 1
    assert booking.date == date(2025, 6, 1)
    assert booking.actual_start_time is None
    assert booking.assigned_bbq_id is None


def test_created_booking_reads_back_unchanged(ledger, customer):
    created = ledger.create(
        draft(
            location_id=3,
            package_id=5,
            time_slot="13:00-16:00",
            bbq_count=2,
            customer_name="Bob",
            customer_phone="+35699112233",
            cleanup_contribution=True,
            notes="Near the lifeguard tower",
        ),
        customer,
    )

    fetched = ledger.get(created.id)

    assert fetched.location_id == 3
    assert fetched.package_id == 5
    assert fetched.date == date(2025, 6, 1)
    assert fetched.time_slot == "13:00-16:00"
    assert fetched.bbq_count == 2
    assert fetched.customer_name == "Bob"
    assert fetched.customer_phone == "+35699112233"
    assert fetched.cleanup_contribution is True
    assert fetched.cleanup_amount == Decimal("5.00")
    assert fetched.notes == "Near the lifeguard tower"
    assert fetched.user_id == customer.id


def test_customer_details_default_to_the_account(ledger, customer):
    booking = ledger.create(draft(customer_name=None, customer_phone=None), customer)

    assert booking.customer_name == "alice"
    assert booking.customer_phone == customer.phone


def test_datetime_string_keeps_its_calendar_day(ledger, customer):
    booking = ledger.create(draft(date="2025-06-01T18:30:00+02:00"), customer)

    assert booking.date == date(2025, 6, 1)


@pytest.mark.parametrize("fields", [
    {"time_slot": "10:00-13:00"},
    {"date": "not-a-date"},
    {"date": "2025-02-30"},
    {"location_id": 99},
    {"package_id": 42},
    {"bbq_count": 0},
])
def test_create_rejects_invalid_drafts(ledger, customer, fields):
    with pytest.raises(ValidationError):
        ledger.create(draft(**fields), customer)

    assert ledger.list_all() == []


def test_get_unknown_booking_raises_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.get(404)


def test_full_slot_reports_zero_and_next_slot(ledger, customer):
    for _ in range(5):
        ledger.create(draft(bbq_count=1), customer)

    slots = {slot["time_slot"]: slot for slot in ledger.availability(DAY)}

    assert slots["09:00-12:00"]["available_units"] == 0
    assert slots["09:00-12:00"]["next_available_slot"] == "13:00-16:00"


def test_create_rejects_booking_beyond_capacity(ledger, customer):
    ledger.create(draft(bbq_count=4), customer)

    with pytest.raises(CapacityExceededError):
        ledger.create(draft(bbq_count=2), customer)

    assert len(ledger.bookings_on(DAY)) == 1


def test_overbooking_policy_stores_and_clamps(backend, db, customer):
    ledger, _ = make_store(backend, db, allow_overbooking=True)
    ledger.create(draft(bbq_count=4), customer)
    ledger.create(draft(bbq_count=3), customer)

    slot = ledger.availability(DAY)[0]

    assert slot["available_units"] == 0
    assert slot["booked_units"] == 7


def test_list_by_user_only_returns_own_bookings(ledger, customer):
    ledger.create(draft(), customer)
    other = type(customer)(id=2, username="bob", phone="+35679000002")
    ledger.create(draft(time_slot="17:00-20:00"), other)

    mine = ledger.list_by_user(customer.id)

    assert [booking.user_id for booking in mine] == [customer.id]
    assert len(ledger.list_all()) == 2


def test_in_transit_then_delivered_stamps_times(ledger, customer):
    booking = ledger.create(draft(), customer)

    ledger.update(booking.id, {"delivery_status": "in_transit"})
    started = ledger.get(booking.id).actual_start_time
    assert started is not None

    ledger.update(booking.id, {"delivery_status": "delivered"})
    delivered = ledger.get(booking.id)

    assert delivered.actual_end_time is not None
    assert delivered.actual_start_time == started


def test_supplied_start_time_wins_over_stamp(ledger, customer):
    booking = ledger.create(draft(), customer)
    when = datetime(2025, 6, 1, 8, 45)

    ledger.update(booking.id, {"delivery_status": "in_transit", "actual_start_time": when})

    assert ledger.get(booking.id).actual_start_time == when


@pytest.mark.parametrize("changes", [
    {"status": "completed"},
    {"payment_status": "refunded"},
    {"delivery_status": "delivered"},
])
def test_update_rejects_skipped_transitions(ledger, customer, changes):
    booking = ledger.create(draft(), customer)

    with pytest.raises(InvalidTransitionError):
        ledger.update(booking.id, changes)


def test_update_rejects_unknown_status_values(ledger, customer):
    booking = ledger.create(draft(), customer)

    with pytest.raises(ValidationError):
        ledger.update(booking.id, {"status": "lost"})

    assert ledger.get(booking.id).status == "pending"


def test_update_rejects_fields_outside_the_contract(ledger, customer):
    booking = ledger.create(draft(), customer)

    with pytest.raises(ValidationError):
        ledger.update(booking.id, {"bbq_count": 3})


def test_update_merges_allowed_fields(ledger, customer):
    booking = ledger.create(draft(), customer)

    ledger.update(booking.id, {"status": "confirmed", "payment_status": "paid", "customer_name": "Alice B"})
    ledger.update(booking.id, {"status": "confirmed", "time_slot": "17:00-20:00", "date": "2025-06-03"})
    updated = ledger.get(booking.id)

    assert updated.status == "confirmed"
    assert updated.payment_status == "paid"
    assert updated.customer_name == "Alice B"
    assert updated.time_slot == "17:00-20:00"
    assert updated.date == date(2025, 6, 3)


def test_moving_into_a_full_slot_is_rejected(ledger, customer):
    ledger.create(draft(time_slot="13:00-16:00", bbq_count=5), customer)
    booking = ledger.create(draft(), customer)

    with pytest.raises(CapacityExceededError):
        ledger.update(booking.id, {"time_slot": "13:00-16:00"})

    assert ledger.get(booking.id).time_slot == "09:00-12:00"


def test_update_unknown_booking_raises_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.update(7, {"delivery_status": "in_transit"})


def test_driver_queues(ledger, customer):
    pending = ledger.create(draft(), customer)
    scheduled = ledger.create(draft(), customer)
    moving = ledger.create(draft(), customer)
    dropped = ledger.create(draft(), customer)
    for booking in (scheduled, moving, dropped):
        ledger.update(booking.id, {"status": "confirmed"})
    ledger.update(moving.id, {"delivery_status": "in_transit"})
    ledger.update(dropped.id, {"delivery_status": "in_transit"})
    ledger.update(dropped.id, {"delivery_status": "delivered"})

    assert [b.id for b in ledger.list_deliveries()] == [scheduled.id, moving.id]
    assert [b.id for b in ledger.list_pickups()] == [dropped.id]
    assert pending.id not in [b.id for b in ledger.list_deliveries()]


def test_created_hook_sees_the_new_id(ledger, customer):
    seen = []

    booking = ledger.create(draft(), customer, on_created=lambda created: seen.append(created.id))

    assert seen == [booking.id]


def test_failing_created_hook_leaves_nothing_behind(ledger, customer):
    def explode(booking):
        raise RuntimeError("commission store down")

    with pytest.raises(RuntimeError):
        ledger.create(draft(), customer, on_created=explode)

    assert ledger.list_all() == []
    assert ledger.availability(DAY)[0]["booked_units"] == 0
