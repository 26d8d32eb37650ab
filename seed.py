"""Seed script: load demo warehouses, slots, equipment and a few moves."""
import os
import sys

# Ensure we're in the project root
sys.path.insert(0, os.path.dirname(__file__))

from sqlalchemy import select

from slottrack.config import settings
from slottrack.database import Base, engine, SessionLocal, ensure_sqlite_dir
import slottrack.models  # noqa: F401  register all models
from slottrack.models.user import User
from slottrack.models.location import Warehouse, Rack, Slot
from slottrack.models.equipment import Equipment, EquipmentClass, ReadinessStatus
from slottrack.services.user_service import hash_password
from slottrack.services import placement_service

USERS = [
    ("admin", "Administrator", "admin"),
    ("manager", "Gudang Manager", "manager"),
    ("teknisi", "Teknisi Lapangan", "teknisi"),
    ("frontdesk", "Front Desk", "frontdesk"),
]

WAREHOUSES = [
    ("WH-JKT", "Gudang Jakarta", "Jl. Gatot Subroto 12, Jakarta", ["A", "B"]),
    ("WH-SBY", "Gudang Surabaya", "Jl. Rungkut Industri 4, Surabaya", ["A"]),
]

SLOTS_PER_RACK = 4

CLASSES = [
    ("TS", "Total Station", "Survey instruments"),
    ("GPS", "GNSS Receiver", "Geodetic GNSS receivers"),
    ("LVL", "Auto Level", None),
]

EQUIPMENT = [
    ("TS-001", "Topcon GM-52", "TS", "TPC-52-0001", "Topcon", "GM-52"),
    ("TS-002", "Sokkia iM-52", "TS", "SOK-52-0101", "Sokkia", "iM-52"),
    ("GPS-001", "Hi-Target V200", "GPS", "HT-V200-4411", "Hi-Target", "V200"),
    ("GPS-002", "CHC i73", "GPS", "CHC-I73-0099", "CHC", "i73"),
    ("LVL-001", "Nikon AC-2S", "LVL", "NK-AC2S-7781", "Nikon", "AC-2S"),
]


def seed():
    ensure_sqlite_dir(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    existing_users = set(db.scalars(select(User.username)).all())
    for username, full_name, role in USERS:
        if username not in existing_users:
            db.add(User(
                username=username,
                full_name=full_name,
                hashed_password=hash_password(f"{username}123"),
                role=role,
            ))
    db.commit()

    existing_wh = set(db.scalars(select(Warehouse.code)).all())
    for code, name, address, rack_codes in WAREHOUSES:
        if code in existing_wh:
            continue
        warehouse = Warehouse(code=code, name=name, address=address)
        db.add(warehouse)
        db.flush()
        for rack_code in rack_codes:
            rack = Rack(warehouse_id=warehouse.id, code=rack_code, zone=f"Zone {rack_code}", capacity=SLOTS_PER_RACK)
            db.add(rack)
            db.flush()
            for n in range(1, SLOTS_PER_RACK + 1):
                db.add(Slot(rack_id=rack.id, code=f"{rack_code}-{n:02d}", label=f"{code} / {rack_code}-{n:02d}"))
    db.commit()

    classes = {c.code: c for c in db.scalars(select(EquipmentClass)).all()}
    for code, name, description in CLASSES:
        if code not in classes:
            eq_class = EquipmentClass(code=code, name=name, description=description)
            db.add(eq_class)
            classes[code] = eq_class
    db.commit()

    existing_eq = set(db.scalars(select(Equipment.code)).all())
    new_equipment = []
    for code, name, class_code, serial, brand, model in EQUIPMENT:
        if code not in existing_eq:
            equipment = Equipment(
                code=code, name=name, class_id=classes[class_code].id,
                serial_number=serial, brand=brand, model=model,
            )
            db.add(equipment)
            new_equipment.append(equipment)
    db.commit()

    # Initial placements go through the engine so the ledger starts consistent
    admin = db.scalar(select(User).where(User.username == "admin"))
    free_slots = db.scalars(
        select(Slot.id)
        .outerjoin(Equipment, Equipment.current_slot_id == Slot.id)
        .where(Equipment.id.is_(None))
        .order_by(Slot.id)
    ).all()
    for equipment, slot_id in zip(new_equipment, free_slots):
        placement_service.move(
            db, equipment.id, slot_id,
            description="Initial placement",
            performed_by=admin.id if admin else None,
        )

    # One piece goes out for calibration and comes back to a different slot
    if len(new_equipment) > 1 and len(free_slots) > len(new_equipment):
        moved = new_equipment[0]
        placement_service.move(
            db, moved.id, free_slots[len(new_equipment)],
            status_after=ReadinessStatus.kalibrasi,
            description="Sent for calibration",
            performed_by=admin.id if admin else None,
        )

    db.close()
    print("Seed complete")


if __name__ == "__main__":
    seed()
