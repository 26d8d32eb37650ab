from slottrack.models.user import User
from slottrack.models.location import Warehouse, Rack, Slot
from slottrack.models.equipment import Equipment, EquipmentClass, ReadinessStatus
from slottrack.models.placement import PlacementHistory

__all__ = ["User", "Warehouse", "Rack", "Slot", "Equipment", "EquipmentClass", "ReadinessStatus", "PlacementHistory"]
