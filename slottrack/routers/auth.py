import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from slottrack.database import get_db
from slottrack.models.user import User
from slottrack.schemas.user import LoginRequest, ProfileUpdate, UserResponse
from slottrack.services.user_service import (
    get_user_by_username,
    record_login,
    update_profile,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

MANAGER_ROLES = {"admin", "manager"}
MOVER_ROLES = {"admin", "manager", "teknisi"}


def require_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Dependency: the logged-in, active user behind the session cookie."""
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Login required")
    user = db.get(User, user_id)
    if not user or not user.is_active:
        request.session.clear()
        raise HTTPException(status_code=401, detail="Login required")
    return user


def require_manager(user: User = Depends(require_user)) -> User:
    """Dependency: catalog and equipment writes."""
    if user.role not in MANAGER_ROLES:
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return user


def require_mover(user: User = Depends(require_user)) -> User:
    """Dependency: placement moves."""
    if user.role not in MOVER_ROLES:
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return user


def require_admin(user: User = Depends(require_user)) -> User:
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Administrators only")
    return user


@router.post("/login", response_model=UserResponse)
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    ip = request.client.host if request.client else "unknown"
    user = get_user_by_username(db, data.username)
    if not user or not verify_password(data.password, user.hashed_password):
        logger.warning("AUDIT: failed login for '%s' from %s", data.username, ip)
        raise HTTPException(status_code=401, detail="Invalid username or password")
    if not user.is_active:
        logger.warning("AUDIT: login attempt on deactivated account '%s' from %s", data.username, ip)
        raise HTTPException(status_code=403, detail="Account is deactivated")
    logger.info("AUDIT: login '%s' (role=%s) from %s", user.username, user.role, ip)
    record_login(db, user)
    request.session["user_id"] = user.id
    request.session["username"] = user.username
    request.session["role"] = user.role
    return user


@router.post("/logout", status_code=204)
def logout(request: Request):
    username = request.session.get("username")
    if username:
        logger.info("AUDIT: logout '%s'", username)
    request.session.clear()


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(require_user)):
    return user


@router.patch("/me", response_model=UserResponse)
def update_me(data: ProfileUpdate, user: User = Depends(require_user), db: Session = Depends(get_db)):
    return update_profile(db, user, data)
