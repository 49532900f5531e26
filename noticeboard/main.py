"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See noticeboard.core.lifespan and
noticeboard.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from noticeboard.api.v1 import api_router
from noticeboard.core.config import Settings, get_settings
from noticeboard.core.exception_handlers import register_exception_handlers
from noticeboard.core.lifespan import create_lifespan
from noticeboard.core.limiter import limiter
from noticeboard.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from noticeboard.shared.telemetry.logging import setup_logging

FILES_PREFIX = "/files"


def _setup_telemetry(app: FastAPI, settings: Settings) -> None:
    from noticeboard.infrastructure.persistence import database
    from noticeboard.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

    telemetry = TelemetryConfig.from_settings(settings)
    database._ensure_engine()
    telemetry.instrument(app, database.engine)
    set_telemetry(telemetry)


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout → request ID → security → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, files_prefix=FILES_PREFIX)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    if settings.storage_backend == "local":
        app.mount(
            FILES_PREFIX,
            StaticFiles(directory=settings.storage_root, check_dir=False),
            name="files",
        )

    if settings.telemetry_enabled:
        _setup_telemetry(app, settings)

    return app


app = create_app()
