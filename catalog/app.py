# -*- coding: utf-8 -*-
"""
FastAPI application factory for the catalog service.

`create_app` wires settings, logging, the database lifecycle, the exception
handlers (the only place status codes for errors are chosen) and the routers.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from catalog import __version__
from catalog.config import Settings, load_settings
from catalog.database import Database
from catalog.errors import InvalidInput, NotFound, StoreUnavailable
from catalog.routes import health_fastapi, products_fastapi

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        filename=settings.log_file,
    )


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput):
        logging.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        # malformed JSON, missing fields, wrong types: same contract as InvalidInput
        errors = exc.errors()
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in errors
        ) or "Invalid request"
        logging.warning(f"Rejected {request.method} {request.url.path}: {detail}")
        return _error(status.HTTP_400_BAD_REQUEST, detail)

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application.

    Settings are read from the environment when not given; a
    `ConfigurationError` propagates so the server never starts half-configured.
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings)
        try:
            database.create_tables()
        except SQLAlchemyError as e:
            # keep serving /health; product calls will answer 500 until the store is back
            logging.error(f"Could not create tables at startup: {e}")
        app.state.database = database
        logging.info(f"Catalog service started ({settings.environment})")
        try:
            yield
        finally:
            database.dispose()

    docs_enabled = not settings.is_production
    app = FastAPI(
        title="Catalog API",
        description="Product catalog CRUD service",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_fastapi.router)
    app.include_router(products_fastapi.router, prefix="/products")

    return app
