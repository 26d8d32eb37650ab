from slottrack.schemas.user import UserCreate, UserUpdate, UserResponse, ProfileUpdate, LoginRequest
from slottrack.schemas.location import (
    WarehouseCreate, WarehouseUpdate, WarehouseResponse,
    RackCreate, RackUpdate, RackResponse,
    SlotCreate, SlotUpdate, SlotResponse,
)
from slottrack.schemas.equipment import (
    EquipmentClassCreate, EquipmentClassResponse,
    EquipmentCreate, EquipmentUpdate, EquipmentResponse, EquipmentRow,
)
from slottrack.schemas.placement import MoveRequest, PlacementRequest, PlacementResponse, HistoryRow
from slottrack.schemas.pagination import Page

__all__ = [
    "UserCreate", "UserUpdate", "UserResponse", "ProfileUpdate", "LoginRequest",
    "WarehouseCreate", "WarehouseUpdate", "WarehouseResponse",
    "RackCreate", "RackUpdate", "RackResponse",
    "SlotCreate", "SlotUpdate", "SlotResponse",
    "EquipmentClassCreate", "EquipmentClassResponse",
    "EquipmentCreate", "EquipmentUpdate", "EquipmentResponse", "EquipmentRow",
    "MoveRequest", "PlacementRequest", "PlacementResponse", "HistoryRow",
    "Page",
]
