from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from slottrack.database import get_db
from slottrack.schemas.placement import HistoryRow
from slottrack.schemas.pagination import Page
from slottrack.routers.auth import require_user
import slottrack.services.history_service as svc

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=Page[HistoryRow])
def list_history(
    page: int = Query(1),
    page_size: int | None = Query(None),
    q: str = Query(""),
    class_id: int | None = Query(None),
    warehouse_id: int | None = Query(None),
    performed_by: int | None = Query(None),
    equipment_id: int | None = Query(None),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    db: Session = Depends(get_db),
    _=Depends(require_user),
):
    return svc.get_history(
        db,
        page=page,
        size=page_size,
        search=q,
        class_id=class_id,
        warehouse_id=warehouse_id,
        performed_by=performed_by,
        equipment_id=equipment_id,
        date_from=date_from,
        date_to=date_to,
    )
