"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.api.routes import router
from src.calculators.errors import InvalidInputError
from src.engine import TaxEngine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: build the tax engine and its cache."""
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Starting up...")

    app.state.engine = TaxEngine.from_settings()

    yield

    logger.info("Shutting down...")
    app.state.engine.clear_cache()


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Report a failed range check as 422 with the offending field."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message, "field": exc.field}, status_code=422)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Contractor Withholding Calculator", lifespan=lifespan)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)  # type: ignore[arg-type]
    app.include_router(router)
    return app
