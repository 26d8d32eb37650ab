from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from slottrack.database import get_db
from slottrack.models.user import User
from slottrack.schemas.placement import PlacementRequest, PlacementResponse
from slottrack.routers.auth import require_mover
import slottrack.services.placement_service as svc

router = APIRouter(prefix="/api/placements", tags=["placements"])


@router.post("", response_model=PlacementResponse, status_code=201)
def place_equipment(data: PlacementRequest, db: Session = Depends(get_db), user: User = Depends(require_mover)):
    return svc.move(
        db,
        data.equipment_id,
        data.to_slot_id,
        status_after=data.status_after,
        description=data.description,
        performed_by=user.id,
    )
