"""API tests for /api/equipment and /api/classes."""


def test_create_equipment(client, catalog):
    res = client.post(
        "/api/equipment",
        json={"code": "GPS-001", "name": "Hi-Target V200", "class_id": catalog["class"]["id"], "brand": "Hi-Target"},
    )
    assert res.status_code == 201
    data = res.json()
    assert data["code"] == "GPS-001"
    assert data["readiness_status"] == "Ready"
    assert data["current_slot_id"] is None


def test_create_equipment_duplicate_code(client, new_equipment):
    new_equipment(code="DUP-001")
    res = client.post("/api/equipment", json={"code": "DUP-001", "name": "Other", "class_id": 1})
    assert res.status_code == 409
    assert res.json()["code"] == "equipment_code_taken"


def test_create_equipment_unknown_class(client, catalog):
    res = client.post("/api/equipment", json={"code": "X-1", "name": "X", "class_id": 999})
    assert res.status_code == 404
    assert res.json()["code"] == "equipment_class_not_found"


def test_list_equipment(client, new_equipment):
    for _ in range(7):
        new_equipment()
    res = client.get("/api/equipment", params={"page_size": 5})
    assert res.status_code == 200
    data = res.json()
    assert data["total"] == 7
    assert data["pages"] == 2
    assert data["size"] == 5
    assert len(data["items"]) == 5

    second = client.get("/api/equipment", params={"page_size": 5, "page": 2}).json()
    assert len(second["items"]) == 2


def test_list_equipment_filters(client, catalog, new_equipment):
    new_equipment(name="Topcon GM-52", readiness_status="Rusak")
    placed = new_equipment(name="Sokkia iM-52")
    client.post(f"/api/equipment/{placed['id']}/move", json={"to_slot_id": catalog["slots"][0]["id"]})

    assert client.get("/api/equipment", params={"q": "topcon"}).json()["total"] == 1
    assert client.get("/api/equipment", params={"status": "Rusak"}).json()["total"] == 1
    by_wh = client.get("/api/equipment", params={"warehouse_id": catalog["warehouse"]["id"]}).json()
    assert [row["id"] for row in by_wh["items"]] == [placed["id"]]


def test_list_unplaced_equipment(client, catalog, new_equipment):
    placed = new_equipment()
    waiting = new_equipment(name="Waiting for a slot")
    client.post(f"/api/equipment/{placed['id']}/move", json={"to_slot_id": catalog["slots"][0]["id"]})

    data = client.get("/api/equipment", params={"unplaced": "true"}).json()
    assert [row["id"] for row in data["items"]] == [waiting["id"]]
    assert data["items"][0]["slot_code"] is None
    assert client.get("/api/equipment", params={"unplaced": "false"}).json()["total"] == 2


def test_list_equipment_invalid_arguments(client, catalog):
    res = client.get("/api/equipment", params={"status": "Broken"})
    assert res.status_code == 400
    assert res.json()["field"] == "status"

    res = client.get("/api/equipment", params={"page": 0})
    assert res.status_code == 400
    assert res.json()["field"] == "page"


def test_update_equipment(client, new_equipment):
    eq = new_equipment()
    res = client.patch(f"/api/equipment/{eq['id']}", json={"name": "Renamed", "readiness_status": "Servis"})
    assert res.status_code == 200
    assert res.json()["name"] == "Renamed"
    assert res.json()["readiness_status"] == "Servis"


def test_update_cannot_touch_location(client, catalog, new_equipment):
    eq = new_equipment()
    res = client.patch(f"/api/equipment/{eq['id']}", json={"current_slot_id": catalog["slots"][0]["id"]})
    assert res.status_code == 422
    assert client.get(f"/api/equipment/{eq['id']}").json()["current_slot_id"] is None


def test_update_rejects_null_required_field(client, new_equipment):
    eq = new_equipment()
    res = client.patch(f"/api/equipment/{eq['id']}", json={"name": None})
    assert res.status_code == 400
    assert res.json()["field"] == "name"


def test_update_duplicate_code(client, new_equipment):
    new_equipment(code="TAKEN")
    eq = new_equipment()
    res = client.patch(f"/api/equipment/{eq['id']}", json={"code": "TAKEN"})
    assert res.status_code == 409


def test_delete_equipment_without_history(client, new_equipment):
    eq = new_equipment()
    assert client.delete(f"/api/equipment/{eq['id']}").status_code == 204
    assert client.get(f"/api/equipment/{eq['id']}").status_code == 404


def test_delete_equipment_with_history_is_refused(client, catalog, new_equipment):
    eq = new_equipment()
    client.post(f"/api/equipment/{eq['id']}/move", json={"to_slot_id": catalog["slots"][0]["id"]})
    res = client.delete(f"/api/equipment/{eq['id']}")
    assert res.status_code == 409
    assert res.json()["code"] == "equipment_has_history"


def test_frontdesk_can_read_but_not_write(client, new_equipment, as_role):
    eq = new_equipment()
    frontdesk = as_role("frontdesk")
    assert frontdesk.get(f"/api/equipment/{eq['id']}").status_code == 200
    assert frontdesk.patch(f"/api/equipment/{eq['id']}", json={"name": "Nope"}).status_code == 403


def test_classes(client, catalog):
    res = client.post("/api/classes", json={"code": "GPS", "name": "GNSS Receiver"})
    assert res.status_code == 201
    codes = [c["code"] for c in client.get("/api/classes").json()]
    assert codes == ["GPS", "TS"]

    dup = client.post("/api/classes", json={"code": "GPS", "name": "Again"})
    assert dup.status_code == 409
    assert dup.json()["code"] == "class_code_taken"
