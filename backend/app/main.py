# backend/app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.routing import APIRoute

from .core.config import settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME
from .domain.grid import GridConfig
from .errors import register_error_handlers
from .routes import health, prometheus
from .routes.v1 import instructor_availability as instructor_availability_v1

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")

    # Fail fast on a grid the editor could not render
    grid = GridConfig.from_settings(settings)
    logger.info(
        "Availability grid %s-%s min, %s min snap, %s blocks/day max",
        grid.start_minutes,
        grid.end_minutes,
        grid.quantum_minutes,
        settings.availability_max_blocks_per_day,
    )

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")


def _unique_operation_id(route: APIRoute) -> str:
    methods = "_".join(sorted(m.lower() for m in (route.methods or [])))
    path = route.path_format.strip("/").replace("/", "_").replace("{", "").replace("}", "")
    name = (route.name or "operation").lower().replace(" ", "_")
    return f"{methods}__{path}__{name}".strip("_")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
    generate_unique_id_function=_unique_operation_id,
)
# Register unified error envelope handlers
register_error_handlers(app)

# Create API v1 router
api_v1 = APIRouter(prefix="/api/v1")
api_v1.include_router(
    instructor_availability_v1.router, prefix="/instructor-availability"
)

# Mount API v1 first
app.include_router(api_v1)

# Infrastructure routes (unversioned)
app.include_router(health.router)
app.include_router(prometheus.router)

# Keep the original FastAPI app for tools/tests that need access to routes
fastapi_app = app

# Export what's needed
__all__ = ["app", "fastapi_app"]
