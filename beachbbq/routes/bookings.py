# beachbbq/routes/bookings.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from beachbbq import models, schemas, auth
from beachbbq.affiliates import AffiliateLedger
from beachbbq.dependencies import get_affiliates, get_ledger
from beachbbq.ledger import SqlBookingLedger

router = APIRouter(
    prefix="/api",
    tags=["Bookings"]
)

# Book a Slot
@router.post("/bookings", response_model=schemas.BookingOut)
def create_booking(
    draft: schemas.BookingCreate,
    ledger: SqlBookingLedger = Depends(get_ledger),
    affiliates: AffiliateLedger = Depends(get_affiliates),
    current_user: models.User = Depends(auth.get_current_user),
):
    link = affiliates.find_active(draft.affiliate_code) if draft.affiliate_code else None

    if link is None:
        return ledger.create(draft, current_user)
    # Booking and commission commit together
    return ledger.create(
        draft,
        current_user,
        affiliate_link_id=link.id,
        on_created=lambda booking: affiliates.add_commission(link, booking),
    )

# List User Bookings
@router.get("/bookings", response_model=List[schemas.BookingOut])
def list_user_bookings(
    ledger: SqlBookingLedger = Depends(get_ledger),
    current_user: models.User = Depends(auth.get_current_user),
):
    return ledger.list_by_user(current_user.id)

@router.get("/bookings/{booking_id}", response_model=schemas.BookingOut)
def get_booking(
    booking_id: int,
    ledger: SqlBookingLedger = Depends(get_ledger),
    current_user: models.User = Depends(auth.get_current_user),
):
    booking = ledger.get(booking_id)
    if booking.user_id != current_user.id and not current_user.is_admin:
        # Someone else's booking looks the same as a missing one
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Booking {booking_id} not found")
    return booking

# Public - Remaining BBQs per Slot for a Day
@router.get("/availability", response_model=List[schemas.SlotAvailability])
def get_availability(
    date: Optional[str] = Query(default=None),
    ledger: SqlBookingLedger = Depends(get_ledger),
):
    if not date:
        raise HTTPException(status_code=400, detail="Query parameter 'date' is required")
    return ledger.availability(date)

# Admin - List All Bookings
@router.get("/admin/bookings", response_model=List[schemas.BookingOut], dependencies=[Depends(auth.verify_admin_user)])
def list_all_bookings(
    status: Optional[str] = None,
    delivery_status: Optional[str] = Query(default=None, alias="deliveryStatus"),
    ledger: SqlBookingLedger = Depends(get_ledger),
):
    bookings = ledger.list_all()
    if status:
        bookings = [booking for booking in bookings if booking.status == status]
    if delivery_status:
        bookings = [booking for booking in bookings if booking.delivery_status == delivery_status]
    return bookings

# Admin - Update Any Booking
@router.patch("/admin/bookings/{booking_id}", response_model=schemas.BookingOut, dependencies=[Depends(auth.verify_admin_user)])
def admin_update_booking(
    booking_id: int,
    changes: schemas.BookingUpdate,
    ledger: SqlBookingLedger = Depends(get_ledger),
):
    return ledger.update(booking_id, changes.model_dump(exclude_unset=True))
