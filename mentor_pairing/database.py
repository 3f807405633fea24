# mentor_pairing/database.py
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.engine import URL
from .config import get_settings

logger = logging.getLogger(__name__)

def get_engine():
    settings = get_settings()
    if settings.DATABASE_URL:
        if settings.DATABASE_URL.startswith("sqlite"):
            # Pool sizing options do not apply to sqlite's pools
            return create_engine(settings.DATABASE_URL, connect_args={"check_same_thread": False})
        DATABASE_URL = settings.DATABASE_URL
    else:
        DATABASE_URL = URL.create(
            "postgresql+psycopg2",
            username=settings.POSTGRES_USER,
            password=settings.POSTGRES_PASSWORD,
            host=settings.POSTGRES_HOST,
            port=settings.POSTGRES_PORT,
            database=settings.POSTGRES_DB,
        )
    return create_engine(
        DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )

# Create the SQLAlchemy engine globally after defining get_engine
engine = get_engine()

# Create a SessionLocal class
SessionLocal = sessionmaker(autoflush=False, bind=engine)

# Base class for declarative models
Base = declarative_base()

# Dependency to get a DB session
def get_db():
    """Provides a database session for a request and closes it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Helper function to create all tables
def create_db_and_tables(bind=None):
    """Creates all defined database tables."""
    # Models must be imported so their tables are registered on Base.metadata
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created or already exist.")

def ping_database(bind=None) -> bool:
    """Runs a trivial query to check the database is reachable."""
    with (bind or engine).connect() as conn:
        conn.execute(text("SELECT 1"))
    return True

if __name__ == "__main__":
    create_db_and_tables()
