import os

# Must be set before slottrack.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("FIRST_ADMIN_PASS", "test-admin-pass")

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from slottrack.database import Base, create_db_engine
import slottrack.models  # noqa: F401  register all models
from slottrack.models.equipment import Equipment, EquipmentClass
from slottrack.models.location import Warehouse, Rack, Slot
from slottrack.models.user import User


TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="function")
def db():
    engine = create_db_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def layout(db):
    """Two warehouses, one rack each, three slots per rack, one class."""
    wh_a = Warehouse(code="WH-A", name="Warehouse A")
    wh_b = Warehouse(code="WH-B", name="Warehouse B")
    db.add_all([wh_a, wh_b])
    db.flush()
    rack_a = Rack(warehouse_id=wh_a.id, code="R1", zone="North")
    rack_b = Rack(warehouse_id=wh_b.id, code="R1", zone="South")
    db.add_all([rack_a, rack_b])
    db.flush()
    slots_a = [Slot(rack_id=rack_a.id, code=f"A-{n}") for n in range(1, 4)]
    slots_b = [Slot(rack_id=rack_b.id, code=f"B-{n}") for n in range(1, 4)]
    db.add_all(slots_a + slots_b)
    eq_class = EquipmentClass(code="TS", name="Total Station")
    db.add(eq_class)
    db.commit()
    return {
        "warehouses": (wh_a, wh_b),
        "racks": (rack_a, rack_b),
        "slots_a": slots_a,
        "slots_b": slots_b,
        "class": eq_class,
    }


@pytest.fixture
def make_equipment(db, layout):
    counter = {"n": 0}

    def _make(**kwargs) -> Equipment:
        counter["n"] += 1
        values = {
            "code": f"EQ-{counter['n']:03d}",
            "name": f"Equipment {counter['n']}",
            "class_id": layout["class"].id,
        }
        values.update(kwargs)
        equipment = Equipment(**values)
        db.add(equipment)
        db.commit()
        return equipment

    return _make


@pytest.fixture
def operator(db):
    user = User(username="budi", full_name="Budi Santoso", hashed_password="x", role="teknisi")
    db.add(user)
    db.commit()
    return user
