"""HTTP routes for the static marketing pages.

Each path renders one Jinja2 template with no dynamic data:

- GET /            -> index.html
- GET /contact     -> contact.html
- GET /about       -> about.html
- ...

The dashboard page is not here: it reads a collection and lives in
form_routes.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates


router = APIRouter()

# path -> template name (without the .html suffix)
PAGES = {
    "/": "index",
    "/contact": "contact",
    "/about": "about",
    "/portfolio": "portfolio",
    "/celebration": "celebration",
    "/ceremonie": "ceremonie",
    "/reception": "reception",
    "/mitzvhans": "mitzvhans",
    "/corporate1": "corporate1",
    "/services": "services",
}


# Module-level reference, to be initialized by the server.
_TEMPLATES: Optional[Jinja2Templates] = None


def init_routes(templates: Jinja2Templates) -> None:
    """Initialize the template engine used by the route handlers."""
    global _TEMPLATES
    _TEMPLATES = templates


def require_templates() -> Jinja2Templates:
    if _TEMPLATES is None:
        raise HTTPException(
            status_code=500,
            detail="Template engine is not configured on the server.",
        )
    return _TEMPLATES


def render_view(request: Request, view: str, context: Optional[dict] = None) -> HTMLResponse:
    """Render `<view>.html` with the given context."""
    templates = require_templates()
    return templates.TemplateResponse(request, f"{view}.html", context or {})


def _page_handler(view: str):
    async def handler(request: Request) -> HTMLResponse:
        return render_view(request, view)

    handler.__name__ = f"page_{view}"
    return handler


for _path, _view in PAGES.items():
    router.add_api_route(
        _path,
        _page_handler(_view),
        methods=["GET"],
        response_class=HTMLResponse,
        include_in_schema=False,
    )
