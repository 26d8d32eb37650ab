from datetime import datetime
from pydantic import BaseModel, Field


class WarehouseBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    capacity: int | None = Field(None, ge=0)


class WarehouseCreate(WarehouseBase):
    pass


class WarehouseUpdate(BaseModel):
    code: str | None = Field(None, min_length=1, max_length=64)
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = None
    capacity: int | None = Field(None, ge=0)

    model_config = {"extra": "forbid"}


class WarehouseResponse(WarehouseBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RackBase(BaseModel):
    warehouse_id: int
    code: str = Field(..., min_length=1, max_length=64)
    zone: str | None = None
    capacity: int | None = Field(None, ge=0)


class RackCreate(RackBase):
    pass


class RackUpdate(BaseModel):
    code: str | None = Field(None, min_length=1, max_length=64)
    zone: str | None = None
    capacity: int | None = Field(None, ge=0)

    model_config = {"extra": "forbid"}


class RackResponse(RackBase):
    id: int
    warehouse_code: str | None = None
    warehouse_name: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SlotBase(BaseModel):
    rack_id: int
    code: str = Field(..., min_length=1, max_length=64)
    label: str | None = None
    notes: str | None = None


class SlotCreate(SlotBase):
    pass


class SlotUpdate(BaseModel):
    code: str | None = Field(None, min_length=1, max_length=64)
    label: str | None = None
    notes: str | None = None

    model_config = {"extra": "forbid"}


class SlotResponse(SlotBase):
    id: int
    rack_code: str | None = None
    zone: str | None = None
    warehouse_id: int | None = None
    warehouse_code: str | None = None
    warehouse_name: str | None = None
    # Occupant, derived from equipment.current_slot_id
    equipment_id: int | None = None
    equipment_code: str | None = None
    equipment_name: str | None = None

    model_config = {"from_attributes": True}
