# beachbbq/routes/driver.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from beachbbq import auth, schemas
from beachbbq.dependencies import get_ledger
from beachbbq.ledger import SqlBookingLedger

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/driver",
    tags=["Driver"]
)

@router.post("/login", response_model=schemas.TokenOut)
def driver_login(payload: schemas.DriverLogin):
    if not auth.check_driver_code(payload.driver_code):
        logger.warning("Rejected driver login with an unknown code")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid driver code")
    return {"access_token": auth.create_driver_token(payload.driver_code.strip().upper()), "token_type": "bearer"}

# Confirmed bookings still waiting to reach the beach
@router.get("/deliveries", response_model=List[schemas.BookingOut], dependencies=[Depends(auth.verify_driver_access)])
def list_deliveries(ledger: SqlBookingLedger = Depends(get_ledger)):
    return ledger.list_deliveries()

# Delivered bookings waiting for collection
@router.get("/pickups", response_model=List[schemas.BookingOut], dependencies=[Depends(auth.verify_driver_access)])
def list_pickups(ledger: SqlBookingLedger = Depends(get_ledger)):
    return ledger.list_pickups()

@router.patch("/bookings/{booking_id}", response_model=schemas.BookingOut)
def advance_delivery(
    booking_id: int,
    payload: schemas.DeliveryAdvance,
    ledger: SqlBookingLedger = Depends(get_ledger),
    driver: dict = Depends(auth.verify_driver_or_admin),
):
    booking = ledger.update(booking_id, {"delivery_status": payload.delivery_status})
    logger.info("Booking %s moved to %s by %s", booking_id, booking.delivery_status, driver["sub"])
    return booking
