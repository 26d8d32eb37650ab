from sqlalchemy.orm import Session
from sqlalchemy import select
from slottrack.database import storage_errors
from slottrack.exceptions import Conflict, InvalidArgument, NotFound
from slottrack.models.equipment import Equipment
from slottrack.models.location import Warehouse, Rack, Slot
from slottrack.schemas.location import (
    WarehouseCreate, WarehouseUpdate,
    RackCreate, RackUpdate,
    SlotCreate, SlotUpdate,
)


def _reject_nulls(changes: dict, *fields: str) -> None:
    for field in fields:
        if field in changes and changes[field] is None:
            raise InvalidArgument(field, f"{field} cannot be empty")


def _warehouse_code_conflict() -> Conflict:
    return Conflict("warehouse_code_taken", "Warehouse code already exists")


def _rack_code_conflict() -> Conflict:
    return Conflict("rack_code_taken", "Rack code already exists in this warehouse")


def _slot_code_conflict() -> Conflict:
    return Conflict("slot_code_taken", "Slot code already exists in this rack")


# --- Warehouses --------------------------------------------------------------

def get_warehouses(db: Session) -> list[Warehouse]:
    return db.scalars(select(Warehouse).order_by(Warehouse.code)).all()


def get_warehouse(db: Session, warehouse_id: int) -> Warehouse:
    warehouse = db.get(Warehouse, warehouse_id)
    if not warehouse:
        raise NotFound("warehouse", warehouse_id)
    return warehouse


def _warehouse_code_taken(db: Session, code: str) -> bool:
    return db.scalar(select(Warehouse.id).where(Warehouse.code == code)) is not None


def create_warehouse(db: Session, data: WarehouseCreate) -> Warehouse:
    with storage_errors(db, "create warehouse", _warehouse_code_conflict()):
        if _warehouse_code_taken(db, data.code):
            raise _warehouse_code_conflict()
        warehouse = Warehouse(**data.model_dump())
        db.add(warehouse)
        db.commit()
        db.refresh(warehouse)
    return warehouse


def update_warehouse(db: Session, warehouse_id: int, data: WarehouseUpdate) -> Warehouse:
    changes = data.model_dump(exclude_unset=True)
    _reject_nulls(changes, "code", "name")
    with storage_errors(db, "update warehouse", _warehouse_code_conflict()):
        warehouse = get_warehouse(db, warehouse_id)
        if changes.get("code") and changes["code"] != warehouse.code and _warehouse_code_taken(db, changes["code"]):
            raise _warehouse_code_conflict()
        for field, value in changes.items():
            setattr(warehouse, field, value)
        db.commit()
        db.refresh(warehouse)
    return warehouse


# --- Racks -------------------------------------------------------------------

def _rack_rows():
    return (
        select(Rack, Warehouse.code.label("warehouse_code"), Warehouse.name.label("warehouse_name"))
        .join(Warehouse, Rack.warehouse_id == Warehouse.id)
    )


def _rack_dict(rack: Rack, warehouse_code: str | None, warehouse_name: str | None) -> dict:
    return {
        "id": rack.id,
        "warehouse_id": rack.warehouse_id,
        "code": rack.code,
        "zone": rack.zone,
        "capacity": rack.capacity,
        "created_at": rack.created_at,
        "updated_at": rack.updated_at,
        "warehouse_code": warehouse_code,
        "warehouse_name": warehouse_name,
    }


def get_racks(db: Session, warehouse_id: int | None = None) -> list[dict]:
    query = _rack_rows()
    if warehouse_id is not None:
        query = query.where(Rack.warehouse_id == warehouse_id)
    with storage_errors(db, "rack listing"):
        rows = db.execute(query.order_by(Warehouse.code, Rack.code)).all()
    return [_rack_dict(*row) for row in rows]


def get_rack(db: Session, rack_id: int) -> dict:
    row = db.execute(_rack_rows().where(Rack.id == rack_id)).first()
    if row is None:
        raise NotFound("rack", rack_id)
    return _rack_dict(*row)


def _rack_code_taken(db: Session, warehouse_id: int, code: str) -> bool:
    return db.scalar(
        select(Rack.id).where(Rack.warehouse_id == warehouse_id, Rack.code == code)
    ) is not None


def create_rack(db: Session, data: RackCreate) -> dict:
    with storage_errors(db, "create rack", _rack_code_conflict()):
        get_warehouse(db, data.warehouse_id)
        if _rack_code_taken(db, data.warehouse_id, data.code):
            raise _rack_code_conflict()
        rack = Rack(**data.model_dump())
        db.add(rack)
        db.commit()
        return get_rack(db, rack.id)


def update_rack(db: Session, rack_id: int, data: RackUpdate) -> dict:
    changes = data.model_dump(exclude_unset=True)
    _reject_nulls(changes, "code")
    with storage_errors(db, "update rack", _rack_code_conflict()):
        rack = db.get(Rack, rack_id)
        if not rack:
            raise NotFound("rack", rack_id)
        if changes.get("code") and changes["code"] != rack.code and _rack_code_taken(db, rack.warehouse_id, changes["code"]):
            raise _rack_code_conflict()
        for field, value in changes.items():
            setattr(rack, field, value)
        db.commit()
        return get_rack(db, rack_id)


# --- Slots -------------------------------------------------------------------

def _slot_rows():
    # Occupant comes from equipment.current_slot_id, the only occupancy record
    return (
        select(
            Slot,
            Rack.code.label("rack_code"),
            Rack.zone.label("zone"),
            Warehouse.id.label("warehouse_id"),
            Warehouse.code.label("warehouse_code"),
            Warehouse.name.label("warehouse_name"),
            Equipment.id.label("equipment_id"),
            Equipment.code.label("equipment_code"),
            Equipment.name.label("equipment_name"),
        )
        .join(Rack, Slot.rack_id == Rack.id)
        .join(Warehouse, Rack.warehouse_id == Warehouse.id)
        .outerjoin(Equipment, Equipment.current_slot_id == Slot.id)
    )


def _slot_dict(row) -> dict:
    data = row._asdict()
    slot = data.pop("Slot")
    return {
        "id": slot.id,
        "rack_id": slot.rack_id,
        "code": slot.code,
        "label": slot.label,
        "notes": slot.notes,
        **data,
    }


def get_slots(
    db: Session,
    rack_id: int | None = None,
    warehouse_id: int | None = None,
    available: bool = False,
) -> list[dict]:
    query = _slot_rows()
    if rack_id is not None:
        query = query.where(Slot.rack_id == rack_id)
    if warehouse_id is not None:
        query = query.where(Rack.warehouse_id == warehouse_id)
    if available:
        query = query.where(Equipment.id.is_(None))
    with storage_errors(db, "slot listing"):
        rows = db.execute(query.order_by(Warehouse.code, Rack.code, Slot.code)).all()
    return [_slot_dict(row) for row in rows]


def get_slot(db: Session, slot_id: int) -> dict:
    row = db.execute(_slot_rows().where(Slot.id == slot_id)).first()
    if row is None:
        raise NotFound("slot", slot_id)
    return _slot_dict(row)


def _slot_code_taken(db: Session, rack_id: int, code: str) -> bool:
    return db.scalar(select(Slot.id).where(Slot.rack_id == rack_id, Slot.code == code)) is not None


def create_slot(db: Session, data: SlotCreate) -> dict:
    with storage_errors(db, "create slot", _slot_code_conflict()):
        if not db.get(Rack, data.rack_id):
            raise NotFound("rack", data.rack_id)
        if _slot_code_taken(db, data.rack_id, data.code):
            raise _slot_code_conflict()
        slot = Slot(**data.model_dump())
        db.add(slot)
        db.commit()
        return get_slot(db, slot.id)


def update_slot(db: Session, slot_id: int, data: SlotUpdate) -> dict:
    changes = data.model_dump(exclude_unset=True)
    _reject_nulls(changes, "code")
    with storage_errors(db, "update slot", _slot_code_conflict()):
        slot = db.get(Slot, slot_id)
        if not slot:
            raise NotFound("slot", slot_id)
        if changes.get("code") and changes["code"] != slot.code and _slot_code_taken(db, slot.rack_id, changes["code"]):
            raise _slot_code_conflict()
        for field, value in changes.items():
            setattr(slot, field, value)
        db.commit()
        return get_slot(db, slot_id)
