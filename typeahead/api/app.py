"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from typeahead.api.routes.completion import router as completion_router
from typeahead.api.routes.health import router as health_router
from typeahead.completion.engine import CompletionEngine
from typeahead.config.settings import Settings, get_settings
from typeahead.exceptions import (
    EmptyInputError,
    InvalidInputError,
    PartialAddError,
    StoreError,
)
from typeahead.storage.connection import close_all_clients
from typeahead.storage.ordered_set import OrderedSetStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    await close_all_clients()


async def _bad_input(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def _partial_add(request: Request, exc: PartialAddError) -> JSONResponse:
    logger.warning("Batch add partially failed: %s", exc)
    return JSONResponse(status_code=502, content={"detail": str(exc), "added": exc.added})


async def _store_unavailable(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Completion store unavailable"})


def create_app(
    settings: Settings | None = None,
    store: OrderedSetStore | None = None,
) -> FastAPI:
    """
    Build and return a fully wired FastAPI application.

    Creates the shared completion engine (on *store* if given, otherwise on
    the backend named in the settings) and maps package errors to HTTP
    statuses before mounting routes.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description=settings.api.description,
        lifespan=_lifespan,
    )

    # Shared state, read by routes through request.app.state
    app.state.settings = settings
    app.state.engine = CompletionEngine(
        store=store,
        store_settings=settings.store,
        completion_settings=settings.completion,
    )

    app.add_exception_handler(InvalidInputError, _bad_input)
    app.add_exception_handler(EmptyInputError, _bad_input)
    app.add_exception_handler(PartialAddError, _partial_add)
    app.add_exception_handler(StoreError, _store_unavailable)

    app.include_router(health_router)
    app.include_router(completion_router)

    return app
