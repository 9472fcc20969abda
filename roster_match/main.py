"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from roster_match.api.router import api_router
from roster_match.config import get_settings
from roster_match.services.import_service import ImportService

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize import service from settings
    """
    logger.info("Starting Roster Match...")
    app.state.import_service = ImportService(settings=settings)
    logger.info("Import service initialized")

    yield

    logger.info("Shutting down Roster Match...")


app = FastAPI(
    title=settings.app_name,
    description="Match attendance exports and roster imports to enrolled people",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "roster_match.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
