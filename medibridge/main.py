# medibridge/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from medibridge import __version__
from medibridge.bridge.api import expose_bridge, withdraw_bridge
from medibridge.bridge.registry import REGISTRY
from medibridge.common.config import Settings, settings
from medibridge.common.database.database import DatabaseManager, DatabaseNotInitializedError
from medibridge.common.utils.logging_config import configure_logging
from medibridge.router.routers import include_routers

logger = logging.getLogger(__name__)


def _error_detail(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def create_app(app_settings: Settings = settings, database: Optional[DatabaseManager] = None) -> FastAPI:
    """Build the backend: database lifecycle, bridge exposure and routes."""
    configure_logging(app_settings.LOG_LEVEL)
    database = database or DatabaseManager(app_settings.database_path)

    # Lifespan context manager for startup and shutdown events
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.initialize()
        expose_bridge(app, database)
        yield
        withdraw_bridge(app)
        database.close()

    app = FastAPI(
        title="MediBridge API",
        description="Local clinic management backend for doctors, dispensaries and channeling centres",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = app_settings
    app.state.database = database
    app.state.api = None
    app.state.bridge_ready = False

    # Middleware for CORS using allowed origins from settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        detail = _error_detail(exc)
        logger.error(f"Database error on {request.method} {request.url.path}: {detail}")
        return JSONResponse(status_code=400, content={"detail": detail})

    @app.exception_handler(DatabaseNotInitializedError)
    async def database_not_initialized_handler(request: Request, exc: DatabaseNotInitializedError):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    # Include routers from a separate file
    include_routers(app)

    # Root endpoint
    @app.get("/", response_class=HTMLResponse)
    async def root():
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>MediBridge API</title>
</head>
<body>
    <h1>MediBridge API {__version__}</h1>
    <p>{len(REGISTRY)} bridge operations. Ready: {"yes" if app.state.bridge_ready else "no"}.</p>
    <p><a href="/docs">Swagger UI</a> &middot; <a href="/redoc">ReDoc</a></p>
</body>
</html>
"""

    return app


app = create_app()
