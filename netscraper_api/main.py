"""NetScraper API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NetScraperError → structured JSON responses
    - CORS allows exactly the configured frontend origin
    - Storage backend selected once on startup via the lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from netscraper_api.api.error_handlers import register_error_handlers
from netscraper_api.api.routes import groups, health, terms
from netscraper_api.config import get_settings
from netscraper_api.infrastructure.observability import setup_logging
from netscraper_api.infrastructure.storage import init_storage, shutdown_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_storage(settings)
    logger.info("NetScraper API started")
    yield
    await shutdown_storage()
    logger.info("NetScraper API shutting down")


app = FastAPI(title="NetScraper API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(groups.router)
app.include_router(terms.router)

register_error_handlers(app)
