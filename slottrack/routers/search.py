from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from slottrack.database import get_db
from slottrack.schemas.search import SearchResponse
from slottrack.routers.auth import require_user
import slottrack.services.search_service as svc

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=SearchResponse)
def global_search(q: str = Query(""), db: Session = Depends(get_db), _=Depends(require_user)):
    return svc.search(db, q)
