import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Config, config as default_config
from app.core.db.engine import Database
from app.core.error_handler import register_exception_handlers
from app.core.rate_limit import FixedWindowRateLimiter
from app.modules.analytics import router as analytics_router
from app.modules.invoices import router as invoices_router
from app.modules.chat import router as chat_router

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db: Database = app.state.db
    if await db.ping():
        logger.info("Database connection OK")
    else:
        logger.warning("Database is not reachable; requests will fail until it is")
    try:
        yield
    finally:
        await db.dispose()
        logger.info("Database connections released")


def create_app(settings: Optional[Config] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Configuration (defaults to the environment-derived config)
        database: Storage handle; created from settings.database_url when omitted.
            The app disposes it on shutdown.
    """
    settings = settings or default_config

    app = FastAPI(
        title="Invoice Analytics API",
        description="Dashboard metrics, invoice search and chat-with-data over the invoice dataset",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = settings
    app.state.db = database or Database(settings.database_url, is_production=settings.is_production)

    register_exception_handlers(app)

    # Middlewares
    if settings.rate_limit_enabled:
        app.add_middleware(
            FixedWindowRateLimiter,
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )

    # CORS is added last so it wraps the limiter and 429s still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers with /api prefix
    app.include_router(analytics_router, prefix="/api")
    app.include_router(invoices_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()


def run() -> None:
    """Entry point for `invoice-api`."""
    import uvicorn

    logger.info(f"🚀 Starting Invoice Analytics API on port {default_config.port}...")
    uvicorn.run(app, host=default_config.host, port=default_config.port)


if __name__ == "__main__":
    run()
