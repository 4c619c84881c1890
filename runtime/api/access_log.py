"""
Request logging for the site.

Two formats are written:

- combined: one Apache "combined" line per non-static request, appended to
  the access log file:

      127.0.0.1 - - [01/Jun/2025:10:00:00 +0000] "GET /about HTTP/1.1" 200 512 "-" "curl/8.0"

- dashboard: a short development-style line for dashboard submissions:

      POST /dashboard-submit 302 0 - 3.127 ms

Requests whose path has a file extension (css, js, images) are treated as
static assets and never written to the access log.
"""

from __future__ import annotations

import logging
import posixpath
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request


ACCESS_LOGGER_NAME = "site.access"
DASHBOARD_LOGGER_NAME = "site.dashboard"

DASHBOARD_SUBMIT_PATH = "/dashboard-submit"


def is_static_path(path: str) -> bool:
    """True if the last path segment has a file extension."""
    return bool(posixpath.splitext(path)[1])


def _clf_timestamp(moment: datetime) -> str:
    return moment.strftime("%d/%b/%Y:%H:%M:%S +0000")


def _header_or_dash(value: Optional[str]) -> str:
    return value if value else "-"


def format_combined(
    request: Request, status_code: int, content_length: Optional[str], moment: datetime
) -> str:
    client = request.client.host if request.client else "-"
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    http_version = request.scope.get("http_version", "1.1")
    return (
        f'{client} - - [{_clf_timestamp(moment)}] '
        f'"{request.method} {url} HTTP/{http_version}" '
        f"{status_code} {_header_or_dash(content_length)} "
        f'"{_header_or_dash(request.headers.get("referer"))}" '
        f'"{_header_or_dash(request.headers.get("user-agent"))}"'
    )


def format_dashboard(
    request: Request, status_code: int, content_length: Optional[str], duration_ms: float
) -> str:
    return (
        f"{request.method} {request.url.path} {status_code} "
        f"{_header_or_dash(content_length)} - {duration_ms:.3f} ms"
    )


def configure_access_logger(log_path: Path) -> logging.Logger:
    """Point the access logger at `log_path` (append mode).

    Any handler from a previous configuration is closed first, so calling
    this once per app instance keeps exactly one open file.
    """
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    for handler in list(access_logger.handlers):
        access_logger.removeHandler(handler)
        handler.close()

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    access_logger.addHandler(handler)
    access_logger.setLevel(logging.INFO)
    access_logger.propagate = False
    return access_logger


def install_access_log(app: FastAPI, log_path: Path) -> None:
    """Register the request-logging middleware on `app`."""
    access_logger = configure_access_logger(log_path)
    dashboard_logger = logging.getLogger(DASHBOARD_LOGGER_NAME)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        moment = datetime.now(timezone.utc)
        try:
            response = await call_next(request)
        except Exception:
            # The server error middleware answers 500 once this propagates.
            if not is_static_path(request.url.path):
                access_logger.info(format_combined(request, 500, None, moment))
            raise
        duration = (time.perf_counter() - start) * 1000
        content_length = response.headers.get("content-length")

        if request.method == "POST" and request.url.path == DASHBOARD_SUBMIT_PATH:
            dashboard_logger.info(
                format_dashboard(request, response.status_code, content_length, duration)
            )

        if not is_static_path(request.url.path):
            access_logger.info(
                format_combined(request, response.status_code, content_length, moment)
            )
        return response
