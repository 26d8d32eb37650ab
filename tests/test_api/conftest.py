import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from slottrack.main import app
from slottrack.database import Base, create_db_engine, get_db
from slottrack.models.user import User
from slottrack.services.user_service import hash_password

TEST_DB_URL = "sqlite://"
PASSWORD = "password123"


@pytest.fixture(scope="function")
def session_factory():
    engine = create_db_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    TestSession = sessionmaker(bind=engine, autoflush=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def make_user(session_factory):
    def _make(username: str, role: str, full_name: str | None = None, is_active: bool = True) -> int:
        db = session_factory()
        user = User(
            username=username,
            full_name=full_name or username.capitalize(),
            hashed_password=hash_password(PASSWORD),
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        user_id = user.id
        db.close()
        return user_id

    return _make


def login(client: TestClient, username: str, password: str = PASSWORD):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.fixture
def anon_client(session_factory):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def client(anon_client, make_user):
    """Client logged in as an administrator (user id 1)."""
    make_user("admin", "admin", full_name="Admin Gudang")
    res = login(anon_client, "admin")
    assert res.status_code == 200
    yield anon_client


@pytest.fixture
def as_role(anon_client, make_user):
    """Log the shared client in as a fresh user with the given role."""
    def _as(role: str) -> TestClient:
        anon_client.post("/api/auth/logout")
        make_user(f"{role}-user", role)
        assert login(anon_client, f"{role}-user").status_code == 200
        return anon_client

    return _as


@pytest.fixture
def catalog(client):
    """Warehouse with one rack of three slots, plus an equipment class."""
    wh = client.post("/api/warehouses", json={"code": "WH-JKT", "name": "Gudang Jakarta"}).json()
    rack = client.post("/api/racks", json={"warehouse_id": wh["id"], "code": "A", "zone": "Zone A"}).json()
    slots = [
        client.post("/api/slots", json={"rack_id": rack["id"], "code": f"A-0{n}"}).json()
        for n in range(1, 4)
    ]
    eq_class = client.post("/api/classes", json={"code": "TS", "name": "Total Station"}).json()
    return {"warehouse": wh, "rack": rack, "slots": slots, "class": eq_class}


@pytest.fixture
def new_equipment(client, catalog):
    counter = {"n": 0}

    def _new(**kwargs) -> dict:
        counter["n"] += 1
        body = {"code": f"TS-{counter['n']:03d}", "name": f"Total Station {counter['n']}", "class_id": catalog["class"]["id"]}
        body.update(kwargs)
        res = client.post("/api/equipment", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _new
