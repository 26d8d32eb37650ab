from datetime import datetime
from pydantic import BaseModel, Field
from slottrack.models.equipment import ReadinessStatus


class EquipmentClassCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class EquipmentClassResponse(EquipmentClassCreate):
    id: int

    model_config = {"from_attributes": True}


class EquipmentBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    class_id: int
    serial_number: str | None = None
    brand: str | None = None
    model: str | None = None
    condition_note: str | None = None
    readiness_status: ReadinessStatus = ReadinessStatus.ready


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(BaseModel):
    """Fields an edit may touch. Location is changed only by a move."""

    code: str | None = Field(None, min_length=1, max_length=64)
    name: str | None = Field(None, min_length=1, max_length=255)
    class_id: int | None = None
    serial_number: str | None = None
    brand: str | None = None
    model: str | None = None
    condition_note: str | None = None
    readiness_status: ReadinessStatus | None = None

    model_config = {"extra": "forbid"}


class EquipmentResponse(EquipmentBase):
    id: int
    current_slot_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EquipmentRow(EquipmentResponse):
    """Listing row with class and current location display fields."""

    class_code: str | None = None
    class_name: str | None = None
    slot_code: str | None = None
    rack_code: str | None = None
    warehouse_id: int | None = None
    warehouse_code: str | None = None
    warehouse_name: str | None = None
