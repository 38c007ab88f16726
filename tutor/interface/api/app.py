"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tutor.config import Settings
from tutor.interface.api.routes import comments, exercises, health
from tutor.interface.error import register_error_handlers
from tutor.util.di.container import create_container, setup_di
from tutor.util.observability import SERVICE_VERSION, instrument_fastapi


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application without a DI container.

    Callers attach a container with ``setup_di``; the module-level ``app``
    uses the production one.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Tutor Comments API",
        description="Threaded exercise discussions with rate limits, abuse flags and moderation",
        version=SERVICE_VERSION,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,  # auth_token cookie
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        expose_headers=["Retry-After"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(exercises.router)
    app_instance.include_router(comments.router)

    return app_instance


def create_production_app() -> FastAPI:
    app_instance = create_app()
    setup_di(app_instance, create_container())
    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_production_app()
