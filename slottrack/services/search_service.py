"""Global search across the catalog: equipment, classes, warehouses, racks, slots.

Each kind contributes a short, ordered list of hits, so the result fits a
quick-find box rather than a listing page.
"""
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from slottrack.database import like_pattern, storage_errors
from slottrack.models.equipment import Equipment, EquipmentClass
from slottrack.models.location import Warehouse, Rack, Slot

MAX_QUERY_LENGTH = 60
EQUIPMENT_LIMIT = 8
CLASS_LIMIT = 6
WAREHOUSE_LIMIT = 6
RACK_LIMIT = 8
SLOT_LIMIT = 8


def _join(*parts) -> str | None:
    text = " · ".join(p for p in parts if p)
    return text or None


def _hit(kind: str, id_: int, title: str, subtitle: str | None) -> dict:
    return {"type": kind, "id": id_, "title": title, "subtitle": subtitle}


def _matches(pattern: str, *columns):
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


def _equipment_hits(db: Session, pattern: str) -> list[dict]:
    rows = db.execute(
        select(Equipment, EquipmentClass.name.label("class_name"))
        .outerjoin(EquipmentClass, Equipment.class_id == EquipmentClass.id)
        .where(
            _matches(
                pattern,
                Equipment.code, Equipment.name, Equipment.serial_number,
                Equipment.brand, Equipment.model, EquipmentClass.code, EquipmentClass.name,
            )
        )
        .order_by(Equipment.code)
        .limit(EQUIPMENT_LIMIT)
    ).all()
    hits = []
    for equipment, class_name in rows:
        serial = f"SN: {equipment.serial_number}" if equipment.serial_number else None
        subtitle = _join(equipment.readiness_status.value, serial, class_name)
        hits.append(_hit("equipment", equipment.id, f"{equipment.code} - {equipment.name}", subtitle))
    return hits


def _class_hits(db: Session, pattern: str) -> list[dict]:
    classes = db.scalars(
        select(EquipmentClass)
        .where(_matches(pattern, EquipmentClass.code, EquipmentClass.name, EquipmentClass.description))
        .order_by(EquipmentClass.code)
        .limit(CLASS_LIMIT)
    ).all()
    return [_hit("class", c.id, f"{c.code} - {c.name}", c.description) for c in classes]


def _warehouse_hits(db: Session, pattern: str) -> list[dict]:
    warehouses = db.scalars(
        select(Warehouse)
        .where(_matches(pattern, Warehouse.code, Warehouse.name, Warehouse.address))
        .order_by(Warehouse.code)
        .limit(WAREHOUSE_LIMIT)
    ).all()
    return [_hit("warehouse", w.id, f"{w.code} - {w.name}", w.address) for w in warehouses]


def _rack_hits(db: Session, pattern: str) -> list[dict]:
    rows = db.execute(
        select(Rack, Warehouse.code.label("warehouse_code"), Warehouse.name.label("warehouse_name"))
        .join(Warehouse, Rack.warehouse_id == Warehouse.id)
        .where(_matches(pattern, Rack.code, Rack.zone, Warehouse.code, Warehouse.name))
        .order_by(Warehouse.code, Rack.code)
        .limit(RACK_LIMIT)
    ).all()
    return [
        _hit(
            "rack",
            rack.id,
            f"Rak {rack.code}",
            _join(f"Zona: {rack.zone}" if rack.zone else None, f"Gudang: {warehouse_code} - {warehouse_name}"),
        )
        for rack, warehouse_code, warehouse_name in rows
    ]


def _slot_hits(db: Session, pattern: str) -> list[dict]:
    rows = db.execute(
        select(Slot, Rack.code.label("rack_code"), Warehouse.code.label("warehouse_code"))
        .join(Rack, Slot.rack_id == Rack.id)
        .join(Warehouse, Rack.warehouse_id == Warehouse.id)
        .where(_matches(pattern, Slot.code, Slot.label))
        .order_by(Warehouse.code, Rack.code, Slot.code)
        .limit(SLOT_LIMIT)
    ).all()
    return [
        _hit(
            "slot",
            slot.id,
            f"{slot.code} - {slot.label}" if slot.label else slot.code,
            f"Rak: {rack_code} · Gudang: {warehouse_code}",
        )
        for slot, rack_code, warehouse_code in rows
    ]


def search(db: Session, q: str | None) -> dict:
    """Hits for ``q`` grouped by kind in a fixed order; a blank query finds nothing."""
    q = (q or "").strip()[:MAX_QUERY_LENGTH]
    if not q:
        return {"q": "", "results": []}
    pattern = like_pattern(q)
    with storage_errors(db, "global search"):
        results = (
            _equipment_hits(db, pattern)
            + _class_hits(db, pattern)
            + _warehouse_hits(db, pattern)
            + _rack_hits(db, pattern)
            + _slot_hits(db, pattern)
        )
    return {"q": q, "results": results}
