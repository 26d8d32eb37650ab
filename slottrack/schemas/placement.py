from datetime import datetime
from pydantic import BaseModel
from slottrack.models.equipment import ReadinessStatus


class MoveRequest(BaseModel):
    # Both checked by the placement engine, which reports them as invalid_argument
    to_slot_id: int | None = None
    status_after: str | None = None
    description: str | None = None


class PlacementRequest(MoveRequest):
    equipment_id: int


class PlacementResponse(BaseModel):
    id: int
    equipment_id: int
    from_slot_id: int | None
    to_slot_id: int
    status_before: ReadinessStatus
    status_after: ReadinessStatus
    description: str | None
    performed_by: int | None
    created_at: datetime

    model_config = {"from_attributes": True}


class HistoryRow(PlacementResponse):
    equipment_code: str | None = None
    equipment_name: str | None = None
    serial_number: str | None = None
    class_id: int | None = None
    class_code: str | None = None
    class_name: str | None = None
    from_slot_code: str | None = None
    from_rack_code: str | None = None
    from_warehouse_code: str | None = None
    from_warehouse_name: str | None = None
    to_slot_code: str | None = None
    to_rack_code: str | None = None
    to_warehouse_code: str | None = None
    to_warehouse_name: str | None = None
    performed_by_name: str | None = None
