from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select
from passlib.context import CryptContext
from slottrack.database import storage_errors
from slottrack.exceptions import Conflict, InvalidArgument, NotFound
from slottrack.models.user import User
from slottrack.schemas.user import UserCreate, UserUpdate, ProfileUpdate

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def _username_conflict() -> Conflict:
    return Conflict("username_taken", "Username already exists")


def get_users(db: Session) -> list[User]:
    return db.scalars(select(User).order_by(User.username)).all()


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("user", user_id)
    return user


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username))


def create_user(db: Session, data: UserCreate) -> User:
    with storage_errors(db, "create user", _username_conflict()):
        if get_user_by_username(db, data.username):
            raise _username_conflict()
        user = User(
            username=data.username,
            full_name=data.full_name or data.username,
            hashed_password=hash_password(data.password),
            role=data.role,
            is_active=data.is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def _apply_changes(db: Session, user: User, changes: dict) -> User:
    if "full_name" in changes and not changes["full_name"]:
        raise InvalidArgument("full_name", "full_name cannot be empty")
    for field in ("role", "is_active"):
        if field in changes and changes[field] is None:
            raise InvalidArgument(field, f"{field} cannot be empty")
    if "password" in changes:
        password = changes.pop("password")
        if not password:
            raise InvalidArgument("password", "password cannot be empty")
        changes["hashed_password"] = hash_password(password)
    with storage_errors(db, f"update user {user.id}"):
        for field, value in changes.items():
            setattr(user, field, value)
        db.commit()
        db.refresh(user)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
    user = get_user(db, user_id)
    return _apply_changes(db, user, data.model_dump(exclude_unset=True))


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    """Self-service edit: name and password only, never role or status."""
    return _apply_changes(db, user, data.model_dump(exclude_unset=True))


def record_login(db: Session, user: User) -> None:
    with storage_errors(db, f"login timestamp for user {user.id}"):
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()
