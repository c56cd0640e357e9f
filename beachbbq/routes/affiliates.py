# beachbbq/routes/affiliates.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from beachbbq import auth, schemas
from beachbbq.affiliates import AffiliateLedger
from beachbbq.dependencies import get_affiliates

router = APIRouter(
    prefix="/api",
    tags=["Affiliates"]
)

# Admin - Affiliate Links
@router.get("/admin/affiliate-links", response_model=List[schemas.AffiliateLinkOut], dependencies=[Depends(auth.verify_admin_user)])
def list_affiliate_links(affiliates: AffiliateLedger = Depends(get_affiliates)):
    return affiliates.list_links()

@router.post("/admin/affiliate-links", response_model=schemas.AffiliateLinkOut, dependencies=[Depends(auth.verify_admin_user)])
def create_affiliate_link(payload: schemas.AffiliateLinkCreate, affiliates: AffiliateLedger = Depends(get_affiliates)):
    return affiliates.create_link(payload.user_id, payload.custom_url, payload.commission_rate)

@router.patch("/admin/affiliate-links/{link_id}", response_model=schemas.AffiliateLinkOut, dependencies=[Depends(auth.verify_admin_user)])
def update_affiliate_link(
    link_id: int,
    payload: schemas.AffiliateLinkUpdate,
    affiliates: AffiliateLedger = Depends(get_affiliates),
):
    return affiliates.set_active(link_id, payload.is_active)

# Public - Count a Visit Through a Referral Link
@router.post("/affiliate/{custom_url}/click", response_model=schemas.AffiliateLinkOut)
def track_affiliate_click(custom_url: str, affiliates: AffiliateLedger = Depends(get_affiliates)):
    return affiliates.track_click(custom_url)

# Admin - Commission Ledger
@router.get("/admin/commissions", response_model=List[schemas.CommissionOut], dependencies=[Depends(auth.verify_admin_user)])
def list_commissions(status: Optional[str] = None, affiliates: AffiliateLedger = Depends(get_affiliates)):
    return affiliates.list_commissions(status)

@router.post("/admin/commissions/{commission_id}/process", response_model=schemas.CommissionOut, dependencies=[Depends(auth.verify_admin_user)])
def process_commission(commission_id: int, affiliates: AffiliateLedger = Depends(get_affiliates)):
    return affiliates.process_commission(commission_id)
