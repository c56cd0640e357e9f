# beachbbq/routes/equipment.py
from typing import List

from fastapi import APIRouter, Depends

from beachbbq import auth, schemas
from beachbbq.dependencies import get_registry
from beachbbq.equipment import SqlEquipmentRegistry

router = APIRouter(
    prefix="/api/admin/bbq-equipment",
    tags=["Equipment"],
    dependencies=[Depends(auth.verify_admin_user)],
)

@router.get("", response_model=List[schemas.EquipmentOut])
def list_equipment(registry: SqlEquipmentRegistry = Depends(get_registry)):
    return registry.list_all()

@router.get("/available", response_model=List[schemas.EquipmentOut])
def list_available_equipment(registry: SqlEquipmentRegistry = Depends(get_registry)):
    return registry.list_available()

@router.post("", response_model=schemas.EquipmentOut)
def create_equipment(payload: schemas.EquipmentCreate, registry: SqlEquipmentRegistry = Depends(get_registry)):
    return registry.create_unit(payload.name, model=payload.model, notes=payload.notes)

@router.get("/{unit_id}", response_model=schemas.EquipmentOut)
def get_equipment(unit_id: int, registry: SqlEquipmentRegistry = Depends(get_registry)):
    return registry.get(unit_id)

# Admin override of the unit status (stamps lastCleaned on cleaning -> available)
@router.patch("/{unit_id}", response_model=schemas.EquipmentOut)
def update_equipment_status(
    unit_id: int,
    payload: schemas.EquipmentUpdate,
    registry: SqlEquipmentRegistry = Depends(get_registry),
):
    return registry.update_status(unit_id, payload.status, notes=payload.notes)

@router.post("/{unit_id}/assign", response_model=schemas.EquipmentOut)
def assign_equipment(
    unit_id: int,
    payload: schemas.EquipmentAssign,
    registry: SqlEquipmentRegistry = Depends(get_registry),
):
    return registry.assign(unit_id, payload.booking_id)

@router.post("/{unit_id}/release", response_model=schemas.EquipmentOut)
def release_equipment(unit_id: int, registry: SqlEquipmentRegistry = Depends(get_registry)):
    return registry.release(unit_id)
