from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from slottrack.database import get_db
from slottrack.schemas.equipment import EquipmentClassCreate, EquipmentClassResponse
from slottrack.routers.auth import require_user, require_manager
import slottrack.services.equipment_service as svc

router = APIRouter(prefix="/api/classes", tags=["classes"])


@router.get("", response_model=list[EquipmentClassResponse])
def list_classes(db: Session = Depends(get_db), _=Depends(require_user)):
    return svc.get_classes(db)


@router.post("", response_model=EquipmentClassResponse, status_code=201)
def create_class(data: EquipmentClassCreate, db: Session = Depends(get_db), _=Depends(require_manager)):
    return svc.create_class(db, data)
