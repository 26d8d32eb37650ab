import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy import select
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware

from slottrack.config import settings
from slottrack.database import Base, SessionLocal, engine, ensure_sqlite_dir
from slottrack.exceptions import SlotTrackError, StorageError
import slottrack.models  # noqa: F401  register all models
from slottrack.models.user import User
from slottrack.services.user_service import hash_password
from slottrack.routers import auth, classes, equipment, health, history, locations, placements, search, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Tables for dev mode without alembic
    ensure_sqlite_dir(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if db.scalar(select(User.id).limit(1)) is None:
            admin = User(
                username=settings.FIRST_ADMIN_USER,
                full_name="Administrator",
                hashed_password=hash_password(settings.FIRST_ADMIN_PASS),
                role="admin",
                is_active=True,
            )
            db.add(admin)
            db.commit()
            logger.info("Created first admin user: %s", settings.FIRST_ADMIN_USER)
    finally:
        db.close()

    yield


app = FastAPI(
    title="SlotTrack",
    description="Warehouse slot placement tracking",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    max_age=settings.SESSION_MAX_AGE,
    https_only=settings.APP_ENV == "production",
    same_site="lax",
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.APP_ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(SlotTrackError)
async def slottrack_error_handler(request: Request, exc: SlotTrackError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(classes.router)
app.include_router(locations.router)
app.include_router(equipment.router)
app.include_router(placements.router)
app.include_router(history.router)
app.include_router(search.router)
