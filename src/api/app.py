"""App factory: wires the ServiceContext, routes and error dispatcher into a FastAPI app."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from src.api.errors import (
    catalog_error_handler,
    request_validation_handler,
    unexpected_error_handler,
)
from src.api.routes import router
from src.core.config import Settings, load_settings
from src.core.exceptions import CatalogError
from src.core.logging import configure_logging
from src.services.context import ServiceContext


def create_app(
    settings: Optional[Settings] = None, context: Optional[ServiceContext] = None
) -> FastAPI:
    """Build the app. The ServiceContext is created once here (tests can pass their own)."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    context = context or ServiceContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        context.close()

    app = FastAPI(title="Game catalog", lifespan=lifespan)
    app.state.context = context
    app.include_router(router)
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
    return app
