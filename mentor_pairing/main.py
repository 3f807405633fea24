# mentor_pairing/main.py
import logging
from fastapi import FastAPI

from .config import get_settings
from .database import create_db_and_tables, ping_database
from .routers import pairing_router, directory_router
from .utils.error_handlers import register_exception_handlers

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mentor Pairing API",
    description="Lifecycle and capacity bookkeeping for mentor-student pairings.",
    version="1.0.0",
)

register_exception_handlers(app)

# Include routers
app.include_router(pairing_router.router)
app.include_router(directory_router.router)

@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Application startup event triggered.")
    try:
        create_db_and_tables()
        logger.info("Startup sequence completed successfully.")
    except Exception as e:
        logger.critical(f"Critical error during startup: {e}", exc_info=True)

@app.get("/health")
def health_check():
    """Health check endpoint"""
    try:
        ping_database()
        return {"status": "healthy"}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}
