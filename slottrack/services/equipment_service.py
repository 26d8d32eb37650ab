from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from slottrack.database import like_pattern, storage_errors
from slottrack.exceptions import Conflict, InvalidArgument, NotFound
from slottrack.models.equipment import Equipment, EquipmentClass, ReadinessStatus
from slottrack.models.location import Warehouse, Rack, Slot
from slottrack.models.placement import PlacementHistory
from slottrack.schemas.equipment import EquipmentClassCreate, EquipmentCreate, EquipmentUpdate
from slottrack.schemas.pagination import Page, page_window, build_page

_REQUIRED_FIELDS = ("code", "name", "class_id", "readiness_status")


def parse_status(value: ReadinessStatus | str | None, field: str = "status") -> ReadinessStatus | None:
    """Empty means "not given"; anything else must be a known readiness status."""
    if value is None or value == "":
        return None
    if isinstance(value, ReadinessStatus):
        return value
    try:
        return ReadinessStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ReadinessStatus)
        raise InvalidArgument(field, f"Unknown readiness status '{value}', expected one of: {allowed}") from None


def _class_code_taken() -> Conflict:
    return Conflict("class_code_taken", "Class code already exists")


def _equipment_code_taken() -> Conflict:
    return Conflict("equipment_code_taken", "Equipment code already exists")


# --- Equipment classes -------------------------------------------------------

def get_classes(db: Session) -> list[EquipmentClass]:
    return db.scalars(select(EquipmentClass).order_by(EquipmentClass.code)).all()


def get_class(db: Session, class_id: int) -> EquipmentClass:
    eq_class = db.get(EquipmentClass, class_id)
    if not eq_class:
        raise NotFound("equipment_class", class_id)
    return eq_class


def get_class_by_code(db: Session, code: str) -> EquipmentClass | None:
    return db.scalar(select(EquipmentClass).where(EquipmentClass.code == code))


def create_class(db: Session, data: EquipmentClassCreate) -> EquipmentClass:
    with storage_errors(db, "create class", _class_code_taken()):
        if get_class_by_code(db, data.code):
            raise _class_code_taken()
        eq_class = EquipmentClass(**data.model_dump())
        db.add(eq_class)
        db.commit()
        db.refresh(eq_class)
    return eq_class


# --- Equipment ---------------------------------------------------------------

def _equipment_rows():
    return (
        select(
            Equipment,
            EquipmentClass.code.label("class_code"),
            EquipmentClass.name.label("class_name"),
            Slot.code.label("slot_code"),
            Rack.code.label("rack_code"),
            Warehouse.id.label("warehouse_id"),
            Warehouse.code.label("warehouse_code"),
            Warehouse.name.label("warehouse_name"),
        )
        .outerjoin(EquipmentClass, Equipment.class_id == EquipmentClass.id)
        .outerjoin(Slot, Equipment.current_slot_id == Slot.id)
        .outerjoin(Rack, Slot.rack_id == Rack.id)
        .outerjoin(Warehouse, Rack.warehouse_id == Warehouse.id)
    )


def _to_row_dict(row) -> dict:
    data = row._asdict()
    equipment = data.pop("Equipment")
    fields = {column.key: getattr(equipment, column.key) for column in Equipment.__table__.columns}
    return {**fields, **data}


def get_equipment_list(
    db: Session,
    page: int = 1,
    size: int | None = None,
    search: str = "",
    status: str | None = None,
    class_id: int | None = None,
    warehouse_id: int | None = None,
    unplaced: bool = False,
) -> Page:
    """Equipment listing, newest first.

    ``unplaced`` keeps only equipment without a slot (the candidates for a
    first placement); combined with ``warehouse_id`` it matches nothing.
    """
    page, size, offset = page_window(page, size)
    query = _equipment_rows()
    search = (search or "").strip()
    if search:
        pattern = like_pattern(search)
        query = query.where(
            or_(
                Equipment.code.ilike(pattern, escape="\\"),
                Equipment.name.ilike(pattern, escape="\\"),
                Equipment.serial_number.ilike(pattern, escape="\\"),
                Equipment.brand.ilike(pattern, escape="\\"),
                Equipment.model.ilike(pattern, escape="\\"),
            )
        )
    status = parse_status(status, field="status")
    if status is not None:
        query = query.where(Equipment.readiness_status == status)
    if class_id is not None:
        query = query.where(Equipment.class_id == class_id)
    if warehouse_id is not None:
        query = query.where(Rack.warehouse_id == warehouse_id)
    if unplaced:
        query = query.where(Equipment.current_slot_id.is_(None))

    with storage_errors(db, "equipment listing"):
        total = db.scalar(select(func.count()).select_from(query.subquery()))
        rows = db.execute(
            query.order_by(Equipment.created_at.desc(), Equipment.id.desc()).offset(offset).limit(size)
        ).all()
    return build_page([_to_row_dict(r) for r in rows], total, page, size)


def get_equipment(db: Session, equipment_id: int) -> Equipment:
    equipment = db.get(Equipment, equipment_id)
    if not equipment:
        raise NotFound("equipment", equipment_id)
    return equipment


def get_equipment_row(db: Session, equipment_id: int) -> dict:
    row = db.execute(_equipment_rows().where(Equipment.id == equipment_id)).first()
    if row is None:
        raise NotFound("equipment", equipment_id)
    return _to_row_dict(row)


def get_equipment_by_code(db: Session, code: str) -> Equipment | None:
    return db.scalar(select(Equipment).where(Equipment.code == code))


def create_equipment(db: Session, data: EquipmentCreate) -> Equipment:
    with storage_errors(db, "create equipment", _equipment_code_taken()):
        get_class(db, data.class_id)
        if get_equipment_by_code(db, data.code):
            raise _equipment_code_taken()
        equipment = Equipment(**data.model_dump())
        db.add(equipment)
        db.commit()
        db.refresh(equipment)
    return equipment


def update_equipment(db: Session, equipment_id: int, data: EquipmentUpdate) -> Equipment:
    changes = data.model_dump(exclude_unset=True)
    for field in _REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise InvalidArgument(field, f"{field} cannot be empty")
    with storage_errors(db, "update equipment", _equipment_code_taken()):
        equipment = get_equipment(db, equipment_id)
        if "code" in changes and changes["code"] != equipment.code:
            if get_equipment_by_code(db, changes["code"]):
                raise _equipment_code_taken()
        if "class_id" in changes:
            get_class(db, changes["class_id"])
        for field, value in changes.items():
            setattr(equipment, field, value)
        db.commit()
        db.refresh(equipment)
    return equipment


def delete_equipment(db: Session, equipment_id: int) -> None:
    with storage_errors(db, "delete equipment"):
        equipment = get_equipment(db, equipment_id)
        has_history = db.scalar(
            select(PlacementHistory.id).where(PlacementHistory.equipment_id == equipment_id).limit(1)
        )
        if has_history is not None:
            raise Conflict("equipment_has_history", "Equipment with placement history cannot be deleted")
        db.delete(equipment)
        db.commit()
