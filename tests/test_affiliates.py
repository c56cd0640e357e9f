from decimal import Decimal

import pytest

from beachbbq import models
from beachbbq.affiliates import AffiliateLedger
from beachbbq.errors import ConflictError, ValidationError
from beachbbq.ledger import SqlBookingLedger
from conftest import DAY, draft

BOOKING = {
    "locationId": 2,
    "packageId": 2,
    "date": DAY,
    "customerName": "Referred Customer",
    "customerPhone": "+35679001122",
    "timeSlot": "13:00-16:00",
}


def customer_id(client, admin_headers):
    users = client.get("/api/admin/users", headers=admin_headers).json()
    return next(u["id"] for u in users if u["username"] == "customer")


@pytest.fixture
def link(client, admin_headers, user_headers):
    resp = client.post(
        "/api/admin/affiliate-links",
        json={"userId": customer_id(client, admin_headers), "customUrl": "SunnyDays"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_new_link_is_active_with_default_rate(link):
    assert link["customUrl"] == "sunnydays"
    assert Decimal(link["commissionRate"]) == 10
    assert link["isActive"] is True
    assert link["clickCount"] == 0
    assert Decimal(link["totalCommission"]) == 0


def test_link_creation_errors(client, admin_headers, link):
    duplicate = client.post(
        "/api/admin/affiliate-links", json={"userId": link["userId"], "customUrl": "sunnydays"}, headers=admin_headers,
    )
    no_owner = client.post(
        "/api/admin/affiliate-links", json={"userId": 99, "customUrl": "ghost"}, headers=admin_headers,
    )
    bad_rate = client.post(
        "/api/admin/affiliate-links",
        json={"userId": link["userId"], "customUrl": "greedy", "commissionRate": 150},
        headers=admin_headers,
    )

    assert duplicate.status_code == 409
    assert no_owner.status_code == 404
    assert bad_rate.status_code == 400


def test_clicks_are_counted(client, link):
    client.post("/api/affiliate/sunnydays/click")
    resp = client.post("/api/affiliate/SUNNYDAYS/click")

    assert resp.json()["clickCount"] == 2
    assert client.post("/api/affiliate/unknown/click").status_code == 404


def test_booking_through_a_link_records_a_pending_commission(client, admin_headers, user_headers, link):
    booking = client.post(
        "/api/bookings", json={**BOOKING, "affiliateCode": "sunnydays"}, headers=user_headers,
    ).json()

    commissions = client.get("/api/admin/commissions", params={"status": "pending"}, headers=admin_headers).json()

    assert booking["affiliateLinkId"] == link["id"]
    assert booking["commissionPaid"] is False
    assert len(commissions) == 1
    assert commissions[0]["bookingId"] == booking["id"]
    assert Decimal(commissions[0]["amount"]) == Decimal("7.00")


def test_processing_a_commission_credits_the_affiliate_once(client, admin_headers, user_headers, link):
    booking = client.post(
        "/api/bookings", json={**BOOKING, "affiliateCode": "sunnydays"}, headers=user_headers,
    ).json()
    commission = client.get("/api/admin/commissions", headers=admin_headers).json()[0]

    processed = client.post(f"/api/admin/commissions/{commission['id']}/process", headers=admin_headers)
    again = client.post(f"/api/admin/commissions/{commission['id']}/process", headers=admin_headers)

    assert processed.status_code == 200
    assert processed.json()["status"] == "processed"
    assert processed.json()["processedAt"] is not None
    assert again.status_code == 409
    assert Decimal(client.get("/api/user/balance", headers=user_headers).json()["balance"]) == Decimal("7.00")
    links = client.get("/api/admin/affiliate-links", headers=admin_headers).json()
    assert Decimal(links[0]["totalCommission"]) == Decimal("7.00")
    assert client.get(f"/api/bookings/{booking['id']}", headers=user_headers).json()["commissionPaid"] is True


def test_inactive_link_is_refused(client, admin_headers, user_headers, link):
    client.patch(f"/api/admin/affiliate-links/{link['id']}", json={"isActive": False}, headers=admin_headers)

    resp = client.post("/api/bookings", json={**BOOKING, "affiliateCode": "sunnydays"}, headers=user_headers)

    assert resp.status_code == 400
    assert client.get("/api/bookings", headers=user_headers).json() == []
    assert client.post("/api/affiliate/sunnydays/click").status_code == 404


def test_commission_filter_rejects_unknown_status(client, admin_headers):
    assert client.get("/api/admin/commissions", params={"status": "lost"}, headers=admin_headers).status_code == 400


def test_commission_is_rounded_to_cents(db):
    owner = models.User(username="partner", password="x", email="p@beachbbq.mt", phone="+35679000009")
    db.add(owner)
    db.commit()
    affiliates = AffiliateLedger(db)
    link = affiliates.create_link(owner.id, "partner", commission_rate=Decimal("12.5"))
    booking = SqlBookingLedger(db).create(draft(package_id=5), owner, affiliate_link_id=link.id)

    commission = affiliates.record_commission(link, booking)

    assert commission.amount == Decimal("23.75")
    assert commission.status == "pending"


def test_link_rate_is_bounded(db):
    with pytest.raises(ValidationError):
        AffiliateLedger(db).create_link(1, "overpaid", commission_rate=101)


def test_processing_is_one_way(db):
    owner = models.User(username="partner", password="x", email="p@beachbbq.mt", phone="+35679000009")
    db.add(owner)
    db.commit()
    affiliates = AffiliateLedger(db)
    link = affiliates.create_link(owner.id, "partner")
    booking = SqlBookingLedger(db).create(draft(package_id=1), owner, affiliate_link_id=link.id)
    commission = affiliates.record_commission(link, booking)

    affiliates.process_commission(commission.id)

    with pytest.raises(ConflictError):
        affiliates.process_commission(commission.id)
    assert Decimal(db.get(models.User, owner.id).balance) == Decimal("4.00")


def test_booking_and_commission_are_written_together(db):
    owner = models.User(username="partner", password="x", email="p@beachbbq.mt", phone="+35679000009")
    db.add(owner)
    db.commit()
    affiliates = AffiliateLedger(db)
    link = affiliates.create_link(owner.id, "partner")
    ledger = SqlBookingLedger(db)

    def fail_after_commission(booking):
        affiliates.add_commission(link, booking)
        raise RuntimeError("disk full")

    with pytest.raises(RuntimeError):
        ledger.create(draft(), owner, affiliate_link_id=link.id, on_created=fail_after_commission)

    assert ledger.list_all() == []
    assert affiliates.list_commissions() == []

    booking = ledger.create(
        draft(), owner, affiliate_link_id=link.id, on_created=lambda created: affiliates.add_commission(link, created),
    )

    assert [c.booking_id for c in affiliates.list_commissions("pending")] == [booking.id]
