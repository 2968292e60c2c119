"""
FastAPI application factory and ASGI entry point.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from typing import Dict, Any

from consultdesk.config import settings
from consultdesk.infrastructure.db.database import engine, SessionLocal
from consultdesk.infrastructure.db.models import create_all_tables
from consultdesk.infrastructure.db.seed import seed_demo_user
from consultdesk.infrastructure.events.event_setup import initialize_event_system
from consultdesk.infrastructure.web.middleware.error_handler import (
    ERROR_RESPONSES,
    ErrorHandlerMiddleware,
    register_exception_handlers
)
from consultdesk.infrastructure.web.routers import (
    dashboard,
    reports,
    projects,
    students,
    time_entries,
    invoices
)

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# (module, path under the API prefix, OpenAPI tag)
ROUTERS = (
    (dashboard, "/dashboard", "Dashboard"),
    (reports, "/reports", "Reports"),
    (projects, "/projects", "Projects"),
    (students, "/students", "Students"),
    (time_entries, "/time-entries", "Time Tracking"),
    (invoices, "/invoices", "Invoices"),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables when configured, seed the demo user and wire event handlers."""
    logger.info(f"Starting {settings.api_title} v{settings.api_version} ({settings.environment})")

    if settings.auto_create_tables:
        create_all_tables(engine)
        logger.info("Database tables checked")

    with SessionLocal() as session:
        seed_demo_user(session)

    initialize_event_system()

    yield

    logger.info("Shutting down, disposing database engine")
    engine.dispose()


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    for module, path, tag in ROUTERS:
        app.include_router(
            module.router,
            prefix=f"{settings.api_prefix}{path}",
            tags=[tag],
            responses=ERROR_RESPONSES
        )

    @app.get("/")
    def root() -> Dict[str, Any]:
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs",
            "health": f"{settings.api_prefix}/health"
        }

    @app.get(f"{settings.api_prefix}/health")
    def health_check() -> Dict[str, Any]:
        """Liveness probe; does not touch the database."""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "version": settings.api_version
        }

    return app


app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "consultdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
