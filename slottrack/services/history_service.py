from datetime import date, datetime, time, timedelta, timezone
from sqlalchemy.orm import Session, aliased
from sqlalchemy import select, func, or_
from slottrack.database import like_pattern, storage_errors
from slottrack.exceptions import InvalidArgument
from slottrack.models.equipment import Equipment, EquipmentClass
from slottrack.models.location import Warehouse, Rack, Slot
from slottrack.models.placement import PlacementHistory
from slottrack.models.user import User
from slottrack.schemas.pagination import Page, page_window, build_page

FromSlot = aliased(Slot, name="from_slot")
FromRack = aliased(Rack, name="from_rack")
FromWarehouse = aliased(Warehouse, name="from_wh")
ToSlot = aliased(Slot, name="to_slot")
ToRack = aliased(Rack, name="to_rack")
ToWarehouse = aliased(Warehouse, name="to_wh")
Performer = aliased(User, name="performer")


def _history_rows():
    # Every join is outer: a row must render even when its equipment, its
    # origin slot or its performer cannot be resolved.
    return (
        select(
            PlacementHistory,
            Equipment.code.label("equipment_code"),
            Equipment.name.label("equipment_name"),
            Equipment.serial_number.label("serial_number"),
            Equipment.class_id.label("class_id"),
            EquipmentClass.code.label("class_code"),
            EquipmentClass.name.label("class_name"),
            FromSlot.code.label("from_slot_code"),
            FromRack.code.label("from_rack_code"),
            FromWarehouse.code.label("from_warehouse_code"),
            FromWarehouse.name.label("from_warehouse_name"),
            ToSlot.code.label("to_slot_code"),
            ToRack.code.label("to_rack_code"),
            ToWarehouse.code.label("to_warehouse_code"),
            ToWarehouse.name.label("to_warehouse_name"),
            Performer.full_name.label("performed_by_name"),
        )
        .outerjoin(Equipment, PlacementHistory.equipment_id == Equipment.id)
        .outerjoin(EquipmentClass, Equipment.class_id == EquipmentClass.id)
        .outerjoin(FromSlot, PlacementHistory.from_slot_id == FromSlot.id)
        .outerjoin(FromRack, FromSlot.rack_id == FromRack.id)
        .outerjoin(FromWarehouse, FromRack.warehouse_id == FromWarehouse.id)
        .outerjoin(ToSlot, PlacementHistory.to_slot_id == ToSlot.id)
        .outerjoin(ToRack, ToSlot.rack_id == ToRack.id)
        .outerjoin(ToWarehouse, ToRack.warehouse_id == ToWarehouse.id)
        .outerjoin(Performer, PlacementHistory.performed_by == Performer.id)
    )


def _to_row_dict(row) -> dict:
    data = row._asdict()
    entry = data.pop("PlacementHistory")
    fields = {column.key: getattr(entry, column.key) for column in PlacementHistory.__table__.columns}
    return {**fields, **data}


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def get_history(
    db: Session,
    page: int = 1,
    size: int | None = None,
    search: str = "",
    class_id: int | None = None,
    warehouse_id: int | None = None,
    performed_by: int | None = None,
    equipment_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> Page:
    """Placement history, newest first. Dates are inclusive UTC calendar days."""
    page, size, offset = page_window(page, size)
    if date_from and date_to and date_from > date_to:
        raise InvalidArgument("date_from", "date_from must not be after date_to")

    query = _history_rows()
    search = (search or "").strip()
    if search:
        pattern = like_pattern(search)
        query = query.where(
            or_(
                Equipment.code.ilike(pattern, escape="\\"),
                Equipment.name.ilike(pattern, escape="\\"),
                PlacementHistory.description.ilike(pattern, escape="\\"),
                Performer.full_name.ilike(pattern, escape="\\"),
            )
        )
    if class_id is not None:
        query = query.where(Equipment.class_id == class_id)
    if warehouse_id is not None:
        query = query.where(
            or_(FromRack.warehouse_id == warehouse_id, ToRack.warehouse_id == warehouse_id)
        )
    if performed_by is not None:
        query = query.where(PlacementHistory.performed_by == performed_by)
    if equipment_id is not None:
        query = query.where(PlacementHistory.equipment_id == equipment_id)
    if date_from is not None:
        query = query.where(PlacementHistory.created_at >= _day_start(date_from))
    if date_to is not None:
        query = query.where(PlacementHistory.created_at < _day_start(date_to + timedelta(days=1)))

    with storage_errors(db, "history listing"):
        total = db.scalar(select(func.count()).select_from(query.subquery()))
        rows = db.execute(
            query.order_by(PlacementHistory.created_at.desc(), PlacementHistory.id.desc())
            .offset(offset)
            .limit(size)
        ).all()
    return build_page([_to_row_dict(r) for r in rows], total, page, size)
