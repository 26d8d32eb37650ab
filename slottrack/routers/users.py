from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from slottrack.database import get_db
from slottrack.schemas.user import UserCreate, UserUpdate, UserResponse
from slottrack.routers.auth import require_admin
import slottrack.services.user_service as svc

router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return svc.get_users(db)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    return svc.create_user(db, data)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return svc.get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db)):
    return svc.update_user(db, user_id, data)
