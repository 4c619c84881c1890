"""HTTP routes backed by the record collections.

Exposes endpoints like:

- GET  /dashboard         -> dashboard page listing every dashboard entry
- GET  /events            -> event bookings as JSON, filtered by query params
- POST /contactone        -> store a contact request
- POST /formdata          -> validate and store an event booking
- POST /dashboard-submit  -> store a dashboard entry, redirect to /dashboard

Handlers never build error responses themselves: store and validation
errors propagate to the central handler registered in server.py.
"""

import json
import logging
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import (
    HTMLResponse,
    JSONResponse,
    PlainTextResponse,
    RedirectResponse,
)

from exceptions.exceptions import BadRequestError, StoreIOError, StoreParseError
from ..models.record_models import Collection, Record, REQUIRED_EVENT_FIELDS
from ..store.record_store import RecordStore, filter_exact
from ..store.validation import require_fields
from .page_routes import render_view


logger = logging.getLogger(__name__)

router = APIRouter()


# Module-level references, to be initialized by the server.
_STORES: Optional[Dict[Collection, RecordStore]] = None


def init_routes(stores: Dict[Collection, RecordStore]) -> None:
    """Initialize the collection stores used by the route handlers."""
    global _STORES
    _STORES = dict(stores)


def _require_store(collection: Collection) -> RecordStore:
    if _STORES is None or collection not in _STORES:
        raise HTTPException(
            status_code=500,
            detail=f"{collection.value} store is not configured on the server.",
        )
    return _STORES[collection]


async def read_record(request: Request) -> Record:
    """Decode the request body (JSON object or HTML form) into a record.

    Repeated form fields become lists; uploaded files are ignored.
    Any other content type yields an empty record.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith("application/json"):
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise BadRequestError(f"Invalid JSON body: {e}") from e
        if not isinstance(data, dict):
            raise BadRequestError("Request body must be a JSON object")
        return data

    if content_type.startswith(
        ("application/x-www-form-urlencoded", "multipart/form-data")
    ):
        form = await request.form()
        record: Record = {}
        for key, value in form.multi_items():
            if not isinstance(value, str):
                continue
            if key not in record:
                record[key] = value
            elif isinstance(record[key], list):
                record[key].append(value)
            else:
                record[key] = [record[key], value]
        return record

    return {}


# --------------------------------------------------------
# Reads
# --------------------------------------------------------


@router.get("/dashboard", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(request: Request) -> HTMLResponse:
    """Render the dashboard page with every stored dashboard entry."""
    store = _require_store(Collection.DASHBOARD)
    try:
        entries = await run_in_threadpool(store.load)
    except StoreIOError as e:
        logger.error("Error reading dashboard data: %s", e)
        raise StoreIOError(
            "Error loading dashboard data.", path=e.path, cause=e.cause
        ) from e
    except StoreParseError as e:
        logger.error("Error parsing dashboard data: %s", e)
        raise StoreParseError("Error parsing dashboard data.", path=e.path) from e

    return render_view(request, "dashboard", {"dashboard_entries": entries})


@router.get("/events")
async def list_events(request: Request) -> JSONResponse:
    """Return event bookings matching every non-empty query parameter.

    Matching is exact but case-insensitive, e.g. ?eventPurpose=wedding
    matches a booking stored with "Wedding".
    """
    store = _require_store(Collection.EVENT)
    events = await run_in_threadpool(store.load)
    criteria = dict(request.query_params.items())
    return JSONResponse(filter_exact(events, criteria))


# --------------------------------------------------------
# Submissions
# --------------------------------------------------------


@router.post("/contactone", response_class=PlainTextResponse)
async def submit_contact(request: Request) -> PlainTextResponse:
    store = _require_store(Collection.CONTACT)
    record = await read_record(request)
    logger.info("New Contact Submission: %s", record)

    await run_in_threadpool(store.append, record)
    return PlainTextResponse("Contact Data Saved Successfully!")


@router.post("/formdata", response_class=PlainTextResponse)
async def submit_event(request: Request) -> PlainTextResponse:
    """Store an event booking once eventPurpose, guests, date and budget are set."""
    store = _require_store(Collection.EVENT)
    record = await read_record(request)
    require_fields(record, REQUIRED_EVENT_FIELDS)
    logger.info("New Event Submission: %s", record)

    await run_in_threadpool(store.append, record)
    return PlainTextResponse("Event Data Saved Successfully!")


@router.post("/dashboard-submit")
async def submit_dashboard(request: Request) -> RedirectResponse:
    store = _require_store(Collection.DASHBOARD)
    record = await read_record(request)
    logger.info("New Dashboard Entry: %s", record)

    await run_in_threadpool(store.append, record)
    # Back to the dashboard so the new entry is visible.
    return RedirectResponse(url="/dashboard", status_code=302)
