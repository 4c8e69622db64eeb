"""
catalog_api.api.app

FastAPI app factory for the catalog service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory, hasher).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog_api import __version__
from catalog_api.api.errors import register_exception_handlers
from catalog_api.api.routers.health import router as health_router
from catalog_api.api.routers.products import router as products_router
from catalog_api.api.routers.users import router as users_router
from catalog_api.auth.passwords import PasswordHasher
from catalog_api.db.init_db import init_db
from catalog_api.db.session import create_engine, create_sessionmaker
from catalog_api.observability.logging import configure_logging, get_logger
from catalog_api.observability.middleware import RequestContextMiddleware
from catalog_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # One engine per app; routers obtain sessions via `catalog_api.api.deps`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
        if settings.env in ("dev", "test"):
            # Prod runs Alembic migrations instead.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Catalog API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)
    app.include_router(products_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Nothing here is module-global: each `create_app` call gets its own engine,
# which is what lets tests run against isolated databases.
