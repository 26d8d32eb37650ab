import logging
import os
from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from slottrack.config import settings
from slottrack.exceptions import Conflict, StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _configure_sqlite(engine: Engine) -> None:
    """Enforce foreign keys and take the write lock at BEGIN.

    pysqlite defers locking until the first write, so two transactions can both
    read a slot as empty before either writes. BEGIN IMMEDIATE serializes
    writers up front and the waiting one reads committed data.

    Read-only transactions take the write lock too and hold it until the
    session closes, so on SQLite every request runs one at a time. Use
    PostgreSQL where concurrent request throughput matters.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(url: str, **kwargs) -> Engine:
    url_obj = make_url(url)
    if url_obj.get_backend_name() == "sqlite":
        connect_args = {"check_same_thread": False, "timeout": settings.SQLITE_BUSY_TIMEOUT}
        connect_args.update(kwargs.pop("connect_args", {}))
        engine = create_engine(url, connect_args=connect_args, **kwargs)
        _configure_sqlite(engine)
        return engine

    pool_options = {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
        "pool_recycle": 1800,
    }
    pool_options.update(kwargs)
    return create_engine(url, **pool_options)


def ensure_sqlite_dir(url: str) -> None:
    url_obj = make_url(url)
    if url_obj.get_backend_name() != "sqlite" or not url_obj.database or url_obj.database == ":memory:":
        return
    directory = os.path.dirname(url_obj.database)
    if directory:
        os.makedirs(directory, exist_ok=True)


engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session, closed (and any open transaction rolled back) on every exit path."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit on normal exit, roll back and re-raise on any exception."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        logger.debug("transaction rolled back", exc_info=True)
        raise


def _is_unique_violation(exc: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed", PostgreSQL: "duplicate key value violates unique constraint"
    return "unique" in str(exc.orig).lower()


@contextmanager
def storage_errors(db: Session, action: str, conflict: Conflict | None = None) -> Iterator[Session]:
    """Roll back and translate store failures raised inside the block.

    A unique violation becomes ``conflict`` when one is given (a concurrent
    writer took the code between our check and our commit); every other
    SQLAlchemy error becomes ``StorageError``. Errors already typed pass through.
    """
    try:
        yield db
    except IntegrityError as exc:
        db.rollback()
        if conflict is not None and _is_unique_violation(exc):
            logger.warning("%s lost a uniqueness race: %s", action, conflict.code)
            raise conflict from exc
        logger.error("%s violated a constraint", action, exc_info=True)
        raise StorageError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s failed in storage", action, exc_info=True)
        raise StorageError() from exc


def like_pattern(text: str) -> str:
    """Substring LIKE pattern in which percent signs, underscores and backslashes match literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
