"""
Main entrypoint for the Parking Control API.

This module assembles the FastAPI application: it sets up logging,
builds the database, repository and service, registers error handlers
and includes the API router.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app``, so
it can be served with uvicorn::

    uvicorn parking_control_api.app.main:app --reload

Tests call ``create_app`` with their own ``Settings`` to point the
service at a temporary database.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database, get_database_path
from .core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from .core.logging_config import setup_logging
from .repositories.parking_spot_repository import ParkingSpotRepository
from .services.parking_spot_service import ParkingSpotService

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain exceptions into HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(StorageError)
    async def storage_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    The database, repository and service are constructed here, once,
    and the service is stored on ``app.state`` where the route
    dependency picks it up.  Migrations are applied on startup.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use instead of the environment‑derived
        module default.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    database = Database(get_database_path(settings.database_url))
    repository = ParkingSpotRepository(database)
    service = ParkingSpotService(repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init()
        logger.info("Database ready at %s", database.path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.parking_spot_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=settings.cors_max_age,
    )
    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
