"""Jinja2 view rendering for the server-rendered pages."""

from typing import Any, Mapping, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ...infrastructure.config.settings import get_settings

settings = get_settings()

templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)
templates.env.globals["app_name"] = settings.APP_NAME
templates.env.globals["catalog_prefix"] = settings.CATALOG_PREFIX


def render(
    request: Request,
    view_name: str,
    context: Optional[Mapping[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render ``<view_name>.html`` with the given context."""
    return templates.TemplateResponse(request, f"{view_name}.html", dict(context or {}), status_code=status_code)
