"""
FastAPI application for SolarBooks.

``create_app()`` wires middleware, error handlers and the routers for the
tax engine, inventory, invoices, quotations and payment schedules. Storage
is prepared in the lifespan: pending migrations are applied and the
connection pool opened before the first request.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from solarbooks import __version__
from solarbooks.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from solarbooks.api.middleware.error_handler import setup_exception_handlers
from solarbooks.api.routes import (
    health_router,
    inventory_router,
    invoices_router,
    payment_schedules_router,
    quotations_router,
    tax_router,
)
from solarbooks.config import Settings, configure_logging, get_logger, get_settings

logger = get_logger(__name__)

ROUTERS = (
    health_router,
    tax_router,
    inventory_router,
    invoices_router,
    quotations_router,
    payment_schedules_router,
)


async def _open_storage(settings: Settings) -> None:
    from solarbooks.infrastructure.storage.sqlite import get_pool
    from solarbooks.infrastructure.storage.sqlite.migrations import initialize_database

    results = await initialize_database(settings.storage.db_path)
    failed = [r for r in results if not r.success]
    if failed:
        raise RuntimeError(f"Migration v{failed[0].version} failed: {failed[0].error}")
    logger.info("database_ready", applied=[r.version for r in results])

    await get_pool()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging()
    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        db_path=str(settings.storage.db_path),
        company=settings.company.name,
    )

    try:
        await _open_storage(settings)
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    if not settings.company.gstin:
        logger.warning(
            "company_gstin_not_set",
            hint="Every supply resolves as intra-state until COMPANY_GSTIN is set",
        )

    yield

    from solarbooks.infrastructure.storage.sqlite import close_pool

    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="SolarBooks API",
        description="Quotations, GST invoicing and stock ledger for solar installations",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "name": settings.app_name,
            "version": __version__,
            "company": settings.company.name,
        }

    return app


app = create_app()


def run() -> None:
    """``solarbooks-api``: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "solarbooks.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    run()
