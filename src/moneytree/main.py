from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from moneytree import __version__
from moneytree.api.middleware.error_handler import (
    handle_domain_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from moneytree.api.middleware.logging import RequestLoggingMiddleware
from moneytree.api.v1 import router as v1_router
from moneytree.api.v1.health import router as health_router
from moneytree.config import settings
from moneytree.core.exceptions import MoneytreeError
from moneytree.core.logging import configure_logging
from moneytree.db.session import AsyncSessionLocal
from moneytree.repositories.category import CategoryRepository


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging(settings.log_level)
    async with AsyncSessionLocal() as session:
        await CategoryRepository(session).ensure_system_roots()
    yield
    # Shutdown


def create_app() -> FastAPI:
    app = FastAPI(
        title="Moneytree API",
        description="Personal finance tracking over an income/expense category tree",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(MoneytreeError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
