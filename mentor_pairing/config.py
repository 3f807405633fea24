from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    # Pydantic Settings will automatically look for these as environment variables
    # or in a .env file

    # Full SQLAlchemy URL; when set it wins over the POSTGRES_* parts (e.g. sqlite for local runs)
    DATABASE_URL: Optional[str] = None

    # Database Settings
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "mentor_pairing_db"

    # SQLAlchemy Connection Pooling Settings
    # Refer to https://docs.sqlalchemy.org/en/20/core/engines.html#connection-pooling-options
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30 # seconds
    DB_POOL_RECYCLE: int = 1800 # seconds (30 minutes)

    # Identity verification (bearer JWT)
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Pairing transactions: a conflicting concurrent write triggers a full re-run
    PAIRING_TX_MAX_ATTEMPTS: int = 5
    PAIRING_TX_RETRY_BACKOFF_SECONDS: float = 0.05

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore" # Ignore extra env variables not defined here
    )

@lru_cache() # Cache settings to avoid re-reading on every call
def get_settings():
    """Returns a cached instance of the Settings."""
    return Settings()
