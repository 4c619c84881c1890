"""
FastAPI application entry point for the celebrations site.

Responsibilities:
- create the FastAPI app
- construct one RecordStore per collection and create missing files at startup
- include the page and form routes
- serve static assets from the public directory
- map every error to a plaintext response in one place

Run with:

    uvicorn runtime.api.server:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from configs.settings import Settings, settings
from exceptions.exceptions import NotFoundError, SiteError, ValidationError
from runtime.models.record_models import Collection
from runtime.store.record_store import RecordStore
from . import form_routes, page_routes
from .access_log import install_access_log, is_static_path


logger = logging.getLogger(__name__)


def build_stores(cfg: Settings) -> Dict[Collection, RecordStore]:
    """One RecordStore per collection, each owning its own file path."""
    paths = {
        Collection.CONTACT: cfg.contact_file,
        Collection.EVENT: cfg.event_file,
        Collection.DASHBOARD: cfg.dashboard_file,
    }
    return {
        collection: RecordStore(
            path, name=collection.value, serialize_appends=cfg.serialize_appends
        )
        for collection, path in paths.items()
    }


# ---------------------------------------------------------------------------
# Centralized error handling
# ---------------------------------------------------------------------------


def error_response(request: Request, exc: SiteError) -> Response:
    """Turn any SiteError into a response: its status code, its message as body."""
    path = request.url.path
    static = is_static_path(path)

    if isinstance(exc, ValidationError):
        logger.info("Rejected submission to %s: %s", path, exc.message)
    elif not static:
        if exc.status_code >= 500:
            logger.error("Error: %s", exc.message)
        else:
            logger.warning("HTTP %s for %s %s: %s", exc.status_code, request.method, path, exc.message)

    if static and exc.status_code == 404:
        # Missing asset: no body.
        return Response(status_code=404)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def handle_site_error(request: Request, exc: SiteError) -> Response:
    return error_response(request, exc)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
    # Unmatched paths and wrong methods both fall through to "not found".
    if exc.status_code in (404, 405):
        return error_response(request, NotFoundError())
    return error_response(request, SiteError(str(exc.detail), status_code=exc.status_code))


async def handle_unexpected_error(request: Request, exc: Exception) -> Response:
    logger.exception("Unexpected error for %s %s", request.method, request.url.path)
    return PlainTextResponse(str(exc) or "Internal Server Error", status_code=500)


# ---------------------------------------------------------------------------
# FastAPI app + route registration
# ---------------------------------------------------------------------------


def create_app(*, override_settings: Optional[Settings] = None) -> FastAPI:
    cfg = override_settings or settings

    logging.basicConfig(level=getattr(logging, cfg.log_level.upper(), logging.INFO))

    stores = build_stores(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        for store in stores.values():
            store.ensure_exists()
        logger.info("Collections ready in %s", cfg.data_dir)
        yield

    app = FastAPI(
        title="Celebrations Site",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.add_exception_handler(SiteError, handle_site_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    install_access_log(app, cfg.access_log_path)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Initialize the router modules with our shared objects, then include them.
    page_routes.init_routes(templates=Jinja2Templates(directory=str(cfg.templates_dir)))
    form_routes.init_routes(stores=stores)
    app.include_router(page_routes.router)
    app.include_router(form_routes.router)

    # Mounted last so that every route above wins over a same-named file.
    if cfg.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(cfg.public_dir)), name="public")
    else:
        logger.warning("Public directory %s not found; static assets disabled", cfg.public_dir)

    app.state.settings = cfg
    app.state.stores = stores
    return app


app = create_app()
