# beachbbq/models.py
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Date, Numeric, Text
from beachbbq.database import Base
import datetime

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt/pbkdf2 hash, never the plain text
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    is_admin = Column(Boolean, default=False)
    balance = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

class Booking(Base):
    __tablename__ = "bookings"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    location_id = Column(Integer, nullable=False)
    package_id = Column(Integer, nullable=False)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    date = Column(Date, index=True, nullable=False)
    time_slot = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending", index=True)
    payment_status = Column(String, nullable=False, default="unpaid")
    delivery_status = Column(String, nullable=False, default="scheduled", index=True)
    bbq_count = Column(Integer, nullable=False, default=1)
    actual_start_time = Column(DateTime, nullable=True)
    actual_end_time = Column(DateTime, nullable=True)
    cleanup_contribution = Column(Boolean, default=False)
    cleanup_amount = Column(Numeric(10, 2), nullable=True)
    # Mirror of BBQEquipment.current_booking_id, kept in step by the registry
    assigned_bbq_id = Column(Integer, nullable=True)
    affiliate_link_id = Column(Integer, ForeignKey("affiliate_links.id"), nullable=True)
    commission_paid = Column(Boolean, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

class BBQEquipment(Base):
    __tablename__ = "bbq_equipment"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    model = Column(String, nullable=True)
    status = Column(String, nullable=False, default="available", index=True)
    current_booking_id = Column(Integer, nullable=True)
    last_cleaned = Column(DateTime, nullable=True)
    last_maintenance = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

class AffiliateLink(Base):
    __tablename__ = "affiliate_links"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    custom_url = Column(String, unique=True, index=True, nullable=False)
    commission_rate = Column(Numeric(5, 2), nullable=False, default=10)
    is_active = Column(Boolean, default=True)
    click_count = Column(Integer, nullable=False, default=0)
    total_commission = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

class CommissionTransaction(Base):
    __tablename__ = "commission_transactions"
    id = Column(Integer, primary_key=True, index=True)
    affiliate_link_id = Column(Integer, ForeignKey("affiliate_links.id"), nullable=False)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    processed_at = Column(DateTime, nullable=True)
