"""
FastAPI application entry point.

Builds the application in a fixed order: configuration, logger,
middleware, exception handlers, routes. The database pool is opened by
the lifespan on startup and closed on shutdown; failing to open it
aborts startup.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from rally.config import DatabaseConfig, LogConfig, SecurityHeadersConfig, get_string, init_env
from rally.database.postgres import close_database_connection, connect_to_database
from rally.errors import register_exception_handlers
from rally.logger import configure_logging
from rally.middleware.install import install_middleware
from rally.routes.hello import router as hello_router
from rally.validation.validator import Validator

LISTEN_PORT = 3000

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool for the lifetime of the application."""
    logger.info("Starting up …")
    await connect_to_database(app.state.db_config)
    logger.info("Application is ready.")

    try:
        yield
    finally:
        logger.info("Shutting down …")
        await close_database_connection()
        logger.info("Shutdown complete.")


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    log_config: LogConfig | None = None,
    db_config: DatabaseConfig | None = None,
    security_config: SecurityHeadersConfig | None = None,
) -> FastAPI:
    """Construct the application. Settings not passed in are read from the environment."""
    env_loaded = init_env()

    app_logger = configure_logging(log_config or LogConfig())
    if env_loaded:
        logger.info(".env file loaded")
    else:
        logger.info("No .env file")

    app = FastAPI(title="Rally", version="0.1.0", lifespan=lifespan)
    app.state.db_config = db_config or DatabaseConfig()
    app.state.validator = Validator()

    install_middleware(app, app_logger, security_config or SecurityHeadersConfig())
    register_exception_handlers(app)
    app.include_router(hello_router)

    return app


app = create_app()


def run() -> None:
    """Serve the application on port 3000."""
    uvicorn.run(
        app,
        host=get_string("APP_HOST", "0.0.0.0"),
        port=LISTEN_PORT,
        log_config=None,
        access_log=False,
    )
