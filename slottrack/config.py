import logging
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    APP_ENV: str = "development"
    SECRET_KEY: str = _DEFAULT_SECRET
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./data/slottrack.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    SQLITE_BUSY_TIMEOUT: float = 15.0

    SESSION_MAX_AGE: int = 60 * 60 * 8  # seconds

    DEFAULT_PAGE_SIZE: int = 20
    MIN_PAGE_SIZE: int = 5
    MAX_PAGE_SIZE: int = 100

    FIRST_ADMIN_USER: str = "admin"
    FIRST_ADMIN_PASS: str = "admin123"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

if settings.SECRET_KEY == _DEFAULT_SECRET:
    if settings.APP_ENV == "production":
        raise RuntimeError("SECRET_KEY must be set in production, check the .env file.")
    else:
        logger.warning("SECRET_KEY has the default value, set it in .env before deploying")

if settings.FIRST_ADMIN_PASS == "admin123":
    logger.warning("FIRST_ADMIN_PASS has the default value 'admin123', change it in .env")
