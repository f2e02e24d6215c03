"""
FastAPI Application Entry Point - development habit API
"""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from habit_tracker.core.config import settings
from habit_tracker.routes import habits, health, integrations

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Silence noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)
logging.getLogger('openai').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup/shutdown events
    """
    logger.info("✓ Habit API started (in-memory store, data is lost on restart)")
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set. AI suggestions will fail.")

    yield

    logger.info("✓ Habit API stopped")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="AI Habit Tracker API",
    version="0.1.0",
    lifespan=lifespan
)

# Register routes
app.include_router(health.router)
app.include_router(habits.router)
app.include_router(integrations.router)
