"""Equipment and history listings, and the global search."""
import math
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from slottrack.exceptions import InvalidArgument, StorageError
from slottrack.models.equipment import EquipmentClass, ReadinessStatus
from slottrack.services.equipment_service import get_equipment_list
from slottrack.services.history_service import get_history
from slottrack.services import search_service
from slottrack.services.placement_service import move
from slottrack.services.search_service import search


# --- Equipment listing -------------------------------------------------------

def test_pages_cover_the_filtered_set_exactly_once(db, make_equipment):
    created = {make_equipment().id for _ in range(23)}

    first = get_equipment_list(db, page=1, size=5)
    assert first.total == 23
    assert first.pages == math.ceil(23 / 5)

    seen = []
    for page in range(1, first.pages + 1):
        seen.extend(row["id"] for row in get_equipment_list(db, page=page, size=5).items)
    assert len(seen) == len(set(seen))
    assert set(seen) == created
    assert get_equipment_list(db, page=first.pages + 1, size=5).items == []


def test_newest_first(db, make_equipment):
    ids = [make_equipment().id for _ in range(3)]
    rows = get_equipment_list(db).items
    assert [row["id"] for row in rows] == list(reversed(ids))


def test_empty_listing_has_zero_pages(db, layout):
    result = get_equipment_list(db)
    assert result.total == 0
    assert result.pages == 0
    assert result.items == []


def test_page_size_is_clamped(db, make_equipment):
    for _ in range(6):
        make_equipment()
    assert get_equipment_list(db, size=1).size == 5
    assert get_equipment_list(db, size=1000).size == 100
    assert get_equipment_list(db).size == 20


def test_page_below_one_is_rejected(db, layout):
    with pytest.raises(InvalidArgument) as exc_info:
        get_equipment_list(db, page=0)
    assert exc_info.value.field == "page"


def test_search_is_case_insensitive(db, make_equipment):
    make_equipment(name="Topcon GM-52", serial_number="TPC-001")
    make_equipment(name="Sokkia iM-52", brand="Sokkia")
    make_equipment(name="Nikon AC-2S")

    assert get_equipment_list(db, search="topcon").total == 1
    assert get_equipment_list(db, search="SOKKIA").total == 1
    assert get_equipment_list(db, search="tpc-001").total == 1
    assert get_equipment_list(db, search="-52").total == 2


def test_status_filter(db, make_equipment):
    make_equipment(readiness_status=ReadinessStatus.rusak)
    make_equipment()

    result = get_equipment_list(db, status="Rusak")
    assert result.total == 1
    assert result.items[0]["readiness_status"] == ReadinessStatus.rusak


def test_unknown_status_filter_is_rejected(db, layout):
    with pytest.raises(InvalidArgument) as exc_info:
        get_equipment_list(db, status="Broken")
    assert exc_info.value.field == "status"


def test_class_and_warehouse_filters(db, layout, make_equipment):
    other = EquipmentClass(code="GPS", name="GNSS")
    db.add(other)
    db.commit()
    in_a = make_equipment()
    in_b = make_equipment(class_id=other.id)
    make_equipment()
    move(db, in_a.id, layout["slots_a"][0].id)
    move(db, in_b.id, layout["slots_b"][0].id)
    wh_a, wh_b = layout["warehouses"]

    assert get_equipment_list(db, class_id=other.id).total == 1
    rows = get_equipment_list(db, warehouse_id=wh_a.id).items
    assert [row["id"] for row in rows] == [in_a.id]
    assert get_equipment_list(db, warehouse_id=wh_b.id, class_id=layout["class"].id).total == 0


def test_rows_carry_location_codes(db, layout, make_equipment):
    placed = make_equipment()
    unplaced = make_equipment()
    move(db, placed.id, layout["slots_a"][1].id)

    rows = {row["id"]: row for row in get_equipment_list(db).items}
    assert rows[placed.id]["slot_code"] == "A-2"
    assert rows[placed.id]["rack_code"] == "R1"
    assert rows[placed.id]["warehouse_code"] == "WH-A"
    assert rows[placed.id]["class_code"] == "TS"
    assert rows[unplaced.id]["slot_code"] is None
    assert rows[unplaced.id]["warehouse_code"] is None


def test_unplaced_filter(db, layout, make_equipment):
    placed = make_equipment()
    waiting = make_equipment()
    move(db, placed.id, layout["slots_a"][0].id)
    wh_a, _ = layout["warehouses"]

    rows = get_equipment_list(db, unplaced=True).items
    assert [row["id"] for row in rows] == [waiting.id]
    assert get_equipment_list(db, unplaced=True, warehouse_id=wh_a.id).total == 0


def test_search_wildcards_match_literally(db, make_equipment):
    make_equipment(name="ND filter 50%")
    make_equipment(name="Kit_A tripod")
    make_equipment(name="Nikon AC-2S", model="C:\\Prism")

    assert get_equipment_list(db, search="%").total == 1
    assert get_equipment_list(db, search="50%").total == 1
    assert get_equipment_list(db, search="_").total == 1
    assert get_equipment_list(db, search="t_ipod").total == 0
    assert get_equipment_list(db, search="\\").total == 1


# --- History listing ---------------------------------------------------------

def test_history_resolves_both_location_chains(db, layout, make_equipment, operator):
    equipment = make_equipment()
    move(db, equipment.id, layout["slots_a"][0].id, performed_by=operator.id)
    move(db, equipment.id, layout["slots_b"][1].id, status_after="Disewa", performed_by=operator.id)

    result = get_history(db)
    assert result.total == 2
    latest = result.items[0]
    assert latest["from_slot_code"] == "A-1"
    assert latest["from_warehouse_code"] == "WH-A"
    assert latest["to_slot_code"] == "B-2"
    assert latest["to_warehouse_code"] == "WH-B"
    assert latest["status_after"] == ReadinessStatus.disewa
    assert latest["performed_by_name"] == "Budi Santoso"
    assert result.items[1]["from_slot_code"] is None


def test_history_with_unknown_performer_still_renders(db, layout, make_equipment):
    equipment = make_equipment()
    move(db, equipment.id, layout["slots_a"][0].id, performed_by=31337)

    row = get_history(db).items[0]
    assert row["performed_by"] == 31337
    assert row["performed_by_name"] is None


def test_history_warehouse_filter_matches_either_side(db, layout, make_equipment):
    equipment = make_equipment()
    move(db, equipment.id, layout["slots_a"][0].id)
    move(db, equipment.id, layout["slots_b"][0].id)
    wh_a, wh_b = layout["warehouses"]

    assert get_history(db, warehouse_id=wh_a.id).total == 2
    assert get_history(db, warehouse_id=wh_b.id).total == 1


def test_history_search_by_performer_and_description(db, layout, make_equipment, operator):
    first = make_equipment(name="Topcon GM-52")
    second = make_equipment(name="Nikon AC-2S")
    move(db, first.id, layout["slots_a"][0].id, performed_by=operator.id)
    move(db, second.id, layout["slots_a"][1].id, description="Returned from site")

    assert get_history(db, search="budi").total == 1
    assert get_history(db, search="returned").total == 1
    assert get_history(db, search="nikon").total == 1
    assert get_history(db, search="nothing-matches").total == 0


def test_history_filters_by_performer_equipment_and_class(db, layout, make_equipment, operator):
    first = make_equipment()
    second = make_equipment()
    move(db, first.id, layout["slots_a"][0].id, performed_by=operator.id)
    move(db, second.id, layout["slots_a"][1].id)

    assert get_history(db, performed_by=operator.id).total == 1
    assert get_history(db, equipment_id=second.id).total == 1
    assert get_history(db, class_id=layout["class"].id).total == 2


def test_history_date_range_is_inclusive(db, layout, make_equipment):
    equipment = make_equipment()
    move(db, equipment.id, layout["slots_a"][0].id)
    today = datetime.now(timezone.utc).date()

    assert get_history(db, date_from=today, date_to=today).total == 1
    assert get_history(db, date_to=today - timedelta(days=1)).total == 0
    assert get_history(db, date_from=today + timedelta(days=1)).total == 0


def test_history_reversed_date_range_is_rejected(db, layout):
    today = datetime.now(timezone.utc).date()
    with pytest.raises(InvalidArgument) as exc_info:
        get_history(db, date_from=today, date_to=today - timedelta(days=1))
    assert exc_info.value.field == "date_from"


def test_history_search_wildcards_match_literally(db, layout, make_equipment):
    first = make_equipment()
    second = make_equipment()
    move(db, first.id, layout["slots_a"][0].id, description="kalibrasi_ulang")
    move(db, second.id, layout["slots_a"][1].id, description="kalibrasi ulang")

    assert get_history(db, search="_").total == 1
    assert get_history(db, search="%").total == 0


# --- Storage failures --------------------------------------------------------

def test_history_storage_failure_is_reported(db, layout):
    db.execute(text("DROP TABLE placement_history"))
    db.commit()

    with pytest.raises(StorageError):
        get_history(db)


def test_equipment_listing_storage_failure_is_reported(db, layout):
    db.execute(text("DROP TABLE equipment_classes"))
    db.commit()

    with pytest.raises(StorageError):
        get_equipment_list(db)
    # The session is usable again once the failure is reported
    assert db.execute(text("SELECT 1")).scalar() == 1


# --- Global search -----------------------------------------------------------

def test_search_spans_every_kind(db, layout, make_equipment):
    make_equipment(code="TS-001", name="Topcon GM-52", serial_number="TPC-9")
    layout["slots_a"][0].label = "Topcon shelf"
    db.commit()

    result = search(db, "topcon")
    assert result["q"] == "topcon"
    assert [hit["type"] for hit in result["results"]] == ["equipment", "slot"]
    equipment_hit = result["results"][0]
    assert equipment_hit["title"] == "TS-001 - Topcon GM-52"
    assert equipment_hit["subtitle"] == "Ready · SN: TPC-9 · Total Station"
    assert result["results"][1]["subtitle"] == "Rak: R1 · Gudang: WH-A"

    kinds = {hit["type"] for hit in search(db, "wh-a")["results"]}
    assert kinds == {"warehouse", "rack"}
    assert [hit["type"] for hit in search(db, "total station")["results"]] == ["equipment", "class"]


def test_search_blank_query_finds_nothing(db, make_equipment):
    make_equipment()
    assert search(db, "   ") == {"q": "", "results": []}
    assert search(db, None) == {"q": "", "results": []}


def test_search_caps_each_kind(db, make_equipment):
    for _ in range(12):
        make_equipment()
    hits = search(db, "EQ-")["results"]
    assert len(hits) == search_service.EQUIPMENT_LIMIT


def test_search_query_is_truncated(db, layout):
    result = search(db, "x" * 100)
    assert result["q"] == "x" * search_service.MAX_QUERY_LENGTH
