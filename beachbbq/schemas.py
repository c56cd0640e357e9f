# beachbbq/schemas.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal


class APIModel(BaseModel):
    # JSON bodies are camelCase; Python code keeps snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Catalog
class LocationOut(APIModel):
    id: int
    name: str
    description: str
    image_url: str

class PackageOut(APIModel):
    id: int
    name: str
    description: str
    price: Decimal
    is_vegetarian: bool
    includes_alcohol: bool


# Users
class UserCreate(APIModel):
    username: str = Field(min_length=3)
    password: str = Field(min_length=6)
    email: EmailStr
    phone: str = Field(min_length=8)

class UserLogin(APIModel):
    username: str
    password: str

class UserOut(APIModel):
    id: int
    username: str
    email: str
    phone: str
    is_admin: bool
    balance: Decimal

class UserAdminUpdate(APIModel):
    is_admin: bool

class BalanceOut(APIModel):
    balance: Decimal

class TokenOut(APIModel):
    access_token: str
    token_type: str = "bearer"
    user: Optional[UserOut] = None


# Bookings
class BookingCreate(APIModel):
    location_id: int
    package_id: int
    date: str  # ISO date or datetime; the calendar day is taken as written
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    time_slot: str
    bbq_count: int = 1
    cleanup_contribution: bool = False
    cleanup_amount: Optional[Decimal] = None
    notes: Optional[str] = None
    affiliate_code: Optional[str] = None

class BookingUpdate(APIModel):
    status: Optional[str] = None
    payment_status: Optional[str] = None
    delivery_status: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    time_slot: Optional[str] = None
    date: Optional[str] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    notes: Optional[str] = None

class BookingOut(APIModel):
    id: int
    user_id: int
    location_id: int
    package_id: int
    customer_name: str
    customer_phone: str
    date: date
    time_slot: str
    status: str
    payment_status: str
    delivery_status: str
    bbq_count: int
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    cleanup_contribution: bool
    cleanup_amount: Optional[Decimal] = None
    assigned_bbq_id: Optional[int] = None
    affiliate_link_id: Optional[int] = None
    commission_paid: bool
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class SlotAvailability(APIModel):
    date: date
    time_slot: str
    available_units: int
    booked_units: int
    is_cleaning_window: bool
    next_available_slot: Optional[str] = None


# Equipment
class EquipmentCreate(APIModel):
    name: str
    model: Optional[str] = None
    notes: Optional[str] = None

class EquipmentUpdate(APIModel):
    status: str
    notes: Optional[str] = None

class EquipmentAssign(APIModel):
    booking_id: int

class EquipmentOut(APIModel):
    id: int
    name: str
    model: Optional[str] = None
    status: str
    current_booking_id: Optional[int] = None
    last_cleaned: Optional[datetime] = None
    last_maintenance: Optional[datetime] = None
    notes: Optional[str] = None


# Drivers
class DriverLogin(APIModel):
    driver_code: str

class DeliveryAdvance(APIModel):
    delivery_status: str


# Affiliates
class AffiliateLinkCreate(APIModel):
    user_id: int
    custom_url: str
    commission_rate: Decimal = Field(default=Decimal("10"), ge=0, le=100)

class AffiliateLinkUpdate(APIModel):
    is_active: bool

class AffiliateLinkOut(APIModel):
    id: int
    user_id: int
    custom_url: str
    commission_rate: Decimal
    is_active: bool
    click_count: int
    total_commission: Decimal

class CommissionOut(APIModel):
    id: int
    affiliate_link_id: int
    booking_id: int
    amount: Decimal
    status: str
    created_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None


# Weather
class WeatherOut(APIModel):
    location: str
    weather: List[dict]
    main: dict
    wind: dict
