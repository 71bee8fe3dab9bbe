"""FastAPI application entrypoint. No business logic; only wiring, logging and error handlers."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from warden.api.v1 import router as api_router
from warden.core.context import AppContext, build_context
from warden.core.errors import ApiError, api_error_handler
from warden.core.log import configure_logging


def create_app(context: AppContext | None = None) -> FastAPI:
    """Build the app around one immutable AppContext; handlers and gates read it from app.state."""
    context = context or build_context()
    settings = context.settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Warden API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.context = context

    app.add_exception_handler(ApiError, api_error_handler)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
