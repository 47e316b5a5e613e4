import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from rotatarr.api.routes_api import router as api_router
from rotatarr.api.routes_users import router as users_router
from rotatarr.core.config import get_settings
from rotatarr.core.database import create_db_and_tables
from rotatarr.providers import register_service
from rotatarr.providers.catalog import DEFAULT_SERVICES

load_dotenv()

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan context manager."""
    create_db_and_tables()
    logger.info(f"Database ready at {settings.database_url}")
    yield


app = FastAPI(
    title="Rotatarr",
    description="One streaming subscription at a time, planned a year ahead",
    version="0.1.0",
    lifespan=app_lifespan,
)

# Register streaming services
for service in DEFAULT_SERVICES:
    register_service(service)

# Include routers
app.include_router(api_router, prefix="/api")
app.include_router(users_router, prefix="/api")
