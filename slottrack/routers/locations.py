from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from slottrack.database import get_db
from slottrack.schemas.location import (
    WarehouseCreate, WarehouseUpdate, WarehouseResponse,
    RackCreate, RackUpdate, RackResponse,
    SlotCreate, SlotUpdate, SlotResponse,
)
from slottrack.routers.auth import require_user, require_manager
import slottrack.services.location_service as svc

router = APIRouter(prefix="/api", tags=["locations"])


# --- Warehouses --------------------------------------------------------------

@router.get("/warehouses", response_model=list[WarehouseResponse])
def list_warehouses(db: Session = Depends(get_db), _=Depends(require_user)):
    return svc.get_warehouses(db)


@router.post("/warehouses", response_model=WarehouseResponse, status_code=201)
def create_warehouse(data: WarehouseCreate, db: Session = Depends(get_db), _=Depends(require_manager)):
    return svc.create_warehouse(db, data)


@router.get("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
def get_warehouse(warehouse_id: int, db: Session = Depends(get_db), _=Depends(require_user)):
    return svc.get_warehouse(db, warehouse_id)


@router.patch("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
def update_warehouse(
    warehouse_id: int, data: WarehouseUpdate, db: Session = Depends(get_db), _=Depends(require_manager)
):
    return svc.update_warehouse(db, warehouse_id, data)


# --- Racks -------------------------------------------------------------------

@router.get("/racks", response_model=list[RackResponse])
def list_racks(
    warehouse_id: int | None = Query(None),
    db: Session = Depends(get_db),
    _=Depends(require_user),
):
    return svc.get_racks(db, warehouse_id=warehouse_id)


@router.post("/racks", response_model=RackResponse, status_code=201)
def create_rack(data: RackCreate, db: Session = Depends(get_db), _=Depends(require_manager)):
    return svc.create_rack(db, data)


@router.get("/racks/{rack_id}", response_model=RackResponse)
def get_rack(rack_id: int, db: Session = Depends(get_db), _=Depends(require_user)):
    return svc.get_rack(db, rack_id)


@router.patch("/racks/{rack_id}", response_model=RackResponse)
def update_rack(rack_id: int, data: RackUpdate, db: Session = Depends(get_db), _=Depends(require_manager)):
    return svc.update_rack(db, rack_id, data)


# --- Slots -------------------------------------------------------------------

@router.get("/slots", response_model=list[SlotResponse])
def list_slots(
    rack_id: int | None = Query(None),
    warehouse_id: int | None = Query(None),
    available: bool = Query(False),
    db: Session = Depends(get_db),
    _=Depends(require_user),
):
    return svc.get_slots(db, rack_id=rack_id, warehouse_id=warehouse_id, available=available)


@router.post("/slots", response_model=SlotResponse, status_code=201)
def create_slot(data: SlotCreate, db: Session = Depends(get_db), _=Depends(require_manager)):
    return svc.create_slot(db, data)


@router.get("/slots/{slot_id}", response_model=SlotResponse)
def get_slot(slot_id: int, db: Session = Depends(get_db), _=Depends(require_user)):
    return svc.get_slot(db, slot_id)


@router.patch("/slots/{slot_id}", response_model=SlotResponse)
def update_slot(slot_id: int, data: SlotUpdate, db: Session = Depends(get_db), _=Depends(require_manager)):
    return svc.update_slot(db, slot_id, data)
