"""
ASGI entry point for the billing API.

``uvicorn src.api.main:app`` serves the module-level ``app``; tests build
their own instance through ``create_app``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    clients_router,
    health_router,
    invoices_router,
    payments_router,
    quotations_router,
    sequences_router,
)
from src.api.routes.health import root_router
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

ROUTERS = (
    root_router,
    health_router,
    clients_router,
    invoices_router,
    quotations_router,
    payments_router,
    sequences_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Migrate and open the pool before serving; close the pool afterwards."""
    from src.infrastructure.storage.sqlite import close_pool, get_pool
    from src.infrastructure.storage.sqlite.migrations import run_migrations

    settings = get_settings()
    logger.info(
        "application_starting",
        environment=settings.environment,
        db_path=str(settings.storage.db_path),
    )

    results = await run_migrations()
    failed = [r.version for r in results if not r.success]
    if failed:
        logger.error("startup_migrations_failed", versions=failed)
        raise RuntimeError(f"Migrations failed: {', '.join(failed)}")
    await get_pool()

    logger.info("application_started", migrations_applied=len(results))
    try:
        yield
    finally:
        await close_pool()
        logger.info("application_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Quotations, tax invoices, payments and client ledgers",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Starlette runs the last added middleware outermost
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    api = get_settings().api
    uvicorn.run("src.api.main:app", host=api.host, port=api.port, reload=api.debug)
