from datetime import date

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from slottrack.database import get_db
from slottrack.models.user import User
from slottrack.schemas.equipment import EquipmentCreate, EquipmentUpdate, EquipmentResponse, EquipmentRow
from slottrack.schemas.placement import MoveRequest, PlacementResponse, HistoryRow
from slottrack.schemas.pagination import Page
from slottrack.routers.auth import require_user, require_manager, require_mover
import slottrack.services.equipment_service as svc
import slottrack.services.history_service as history_svc
import slottrack.services.placement_service as placement_svc

router = APIRouter(prefix="/api/equipment", tags=["equipment"])


@router.get("", response_model=Page[EquipmentRow])
def list_equipment(
    page: int = Query(1),
    page_size: int | None = Query(None),
    q: str = Query(""),
    status: str | None = Query(None),
    class_id: int | None = Query(None),
    warehouse_id: int | None = Query(None),
    unplaced: bool = Query(False),
    db: Session = Depends(get_db),
    _=Depends(require_user),
):
    return svc.get_equipment_list(
        db,
        page=page,
        size=page_size,
        search=q,
        status=status,
        class_id=class_id,
        warehouse_id=warehouse_id,
        unplaced=unplaced,
    )


@router.post("", response_model=EquipmentResponse, status_code=201)
def create_equipment(data: EquipmentCreate, db: Session = Depends(get_db), _=Depends(require_manager)):
    return svc.create_equipment(db, data)


@router.get("/{equipment_id}", response_model=EquipmentRow)
def get_equipment(equipment_id: int, db: Session = Depends(get_db), _=Depends(require_user)):
    return svc.get_equipment_row(db, equipment_id)


@router.patch("/{equipment_id}", response_model=EquipmentResponse)
def update_equipment(
    equipment_id: int, data: EquipmentUpdate, db: Session = Depends(get_db), _=Depends(require_manager)
):
    return svc.update_equipment(db, equipment_id, data)


@router.delete("/{equipment_id}", status_code=204)
def delete_equipment(equipment_id: int, db: Session = Depends(get_db), _=Depends(require_manager)):
    svc.delete_equipment(db, equipment_id)
    return Response(status_code=204)


@router.post("/{equipment_id}/move", response_model=PlacementResponse, status_code=201)
def move_equipment(
    equipment_id: int,
    data: MoveRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_mover),
):
    return placement_svc.move(
        db,
        equipment_id,
        data.to_slot_id,
        status_after=data.status_after,
        description=data.description,
        performed_by=user.id,
    )


@router.get("/{equipment_id}/history", response_model=Page[HistoryRow])
def equipment_history(
    equipment_id: int,
    page: int = Query(1),
    page_size: int | None = Query(None),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    db: Session = Depends(get_db),
    _=Depends(require_user),
):
    svc.get_equipment(db, equipment_id)
    return history_svc.get_history(
        db, page=page, size=page_size, equipment_id=equipment_id, date_from=date_from, date_to=date_to
    )
