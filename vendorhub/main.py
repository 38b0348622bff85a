"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, routers. No business
logic here. See vendorhub.core.lifespan and vendorhub.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear the get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI

from vendorhub.api.v1 import api_router
from vendorhub.core.config import get_settings
from vendorhub.core.exception_handlers import register_exception_handlers
from vendorhub.core.lifespan import create_lifespan
from vendorhub.shared.telemetry.logging import setup_logging


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

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()
