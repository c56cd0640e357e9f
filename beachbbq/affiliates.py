# beachbbq/affiliates.py
"""
Affiliate links and the commission ledger keyed off bookings.

Processing a commission is one-way (pending -> processed) and updates the
transaction, the owner's balance, the link's running total and the booking's
`commission_paid` flag in a single transaction.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from beachbbq import catalog, models
from beachbbq.database import transaction
from beachbbq.errors import ConflictError, NotFoundError, ValidationError
from beachbbq.statuses import CommissionStatus, parse_status

logger = logging.getLogger(__name__)

DEFAULT_COMMISSION_RATE = Decimal("10")
CENTS = Decimal("0.01")


class AffiliateLedger:
    def __init__(self, db: Session):
        self.db = db

    def create_link(self, user_id: int, custom_url: str, commission_rate=DEFAULT_COMMISSION_RATE) -> models.AffiliateLink:
        custom_url = (custom_url or "").strip().lower()
        if not custom_url:
            raise ValidationError("customUrl is required")
        rate = Decimal(str(commission_rate))
        if rate < 0 or rate > 100:
            raise ValidationError("commissionRate must be between 0 and 100")

        if self.db.query(models.User).filter(models.User.id == user_id).first() is None:
            raise NotFoundError("User", user_id)
        if self.db.query(models.AffiliateLink).filter(models.AffiliateLink.custom_url == custom_url).first():
            raise ConflictError(f"Affiliate link '{custom_url}' already exists")

        link = models.AffiliateLink(
            user_id=user_id,
            custom_url=custom_url,
            commission_rate=rate,
            is_active=True,
            click_count=0,
            total_commission=Decimal("0"),
        )
        with transaction(self.db):
            self.db.add(link)
        logger.info("Affiliate link '%s' created for user %s at %s%%", custom_url, user_id, rate)
        return link

    def list_links(self) -> List[models.AffiliateLink]:
        return self.db.query(models.AffiliateLink).order_by(models.AffiliateLink.id).all()

    def get_link(self, link_id: int) -> models.AffiliateLink:
        link = self.db.query(models.AffiliateLink).filter(models.AffiliateLink.id == link_id).first()
        if link is None:
            raise NotFoundError("Affiliate link", link_id)
        return link

    def set_active(self, link_id: int, is_active: bool) -> models.AffiliateLink:
        with transaction(self.db):
            link = self.get_link(link_id)
            link.is_active = is_active
        return link

    def _active_link(self, custom_url: str) -> Optional[models.AffiliateLink]:
        return self.db.query(models.AffiliateLink).filter(
            models.AffiliateLink.custom_url == (custom_url or "").strip().lower(),
            models.AffiliateLink.is_active == True,  # noqa: E712
        ).first()

    # Lookup for the affiliateCode field of a booking body
    def find_active(self, custom_url: str) -> models.AffiliateLink:
        link = self._active_link(custom_url)
        if link is None:
            raise ValidationError(f"Unknown or inactive affiliate code '{custom_url}'")
        return link

    def track_click(self, custom_url: str) -> models.AffiliateLink:
        with transaction(self.db):
            link = self._active_link(custom_url)
            if link is None:
                raise NotFoundError("Affiliate link", custom_url)
            link.click_count = (link.click_count or 0) + 1
        return link

    def add_commission(self, link: models.AffiliateLink, booking: models.Booking) -> models.CommissionTransaction:
        """Stage a pending commission for `booking` without committing it."""
        package = catalog.get_package(booking.package_id)
        amount = (package["price"] * Decimal(link.commission_rate) / 100).quantize(CENTS)
        commission = models.CommissionTransaction(
            affiliate_link_id=link.id,
            booking_id=booking.id,
            amount=amount,
            status=CommissionStatus.PENDING.value,
        )
        self.db.add(commission)
        self.db.flush()
        logger.info("Commission of %s recorded for booking %s via '%s'", amount, booking.id, link.custom_url)
        return commission

    def record_commission(self, link: models.AffiliateLink, booking: models.Booking) -> models.CommissionTransaction:
        with transaction(self.db):
            commission = self.add_commission(link, booking)
        return commission

    def list_commissions(self, status: Optional[str] = None) -> List[models.CommissionTransaction]:
        query = self.db.query(models.CommissionTransaction)
        if status:
            query = query.filter(
                models.CommissionTransaction.status == parse_status(CommissionStatus, status).value
            )
        return query.order_by(models.CommissionTransaction.id).all()

    def process_commission(self, commission_id: int) -> models.CommissionTransaction:
        with transaction(self.db):
            commission = self.db.query(models.CommissionTransaction).filter(
                models.CommissionTransaction.id == commission_id
            ).first()
            if commission is None:
                raise NotFoundError("Commission transaction", commission_id)
            if commission.status != CommissionStatus.PENDING.value:
                raise ConflictError(f"Commission {commission_id} is already {commission.status}")

            link = self.get_link(commission.affiliate_link_id)
            owner = self.db.query(models.User).filter(models.User.id == link.user_id).first()
            if owner is None:
                raise NotFoundError("User", link.user_id)
            booking = self.db.query(models.Booking).filter(models.Booking.id == commission.booking_id).first()
            if booking is None:
                raise NotFoundError("Booking", commission.booking_id)

            amount = Decimal(commission.amount)
            owner.balance = Decimal(owner.balance or 0) + amount
            link.total_commission = Decimal(link.total_commission or 0) + amount
            booking.commission_paid = True
            commission.status = CommissionStatus.PROCESSED.value
            commission.processed_at = datetime.utcnow()

        logger.info("Commission %s processed: %s credited to user %s", commission_id, amount, owner.id)
        return commission
