from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import get_settings
from ..modules.common.utils.error_handler import register_exception_handlers
from .api import router as api_router
from .ui import router as ui_router
from .ui.templating import templates

settings = get_settings()

app = create_application(
    router=api_router,
    settings=settings,
    title="Local Library",
    description="""
    # Local Library

    Server-rendered catalog pages for managing authors:

    * List authors and view each author's books
    * Create and update authors through validated forms
    * Delete authors that no book references any more
    """,
)

app.include_router(ui_router.router)
app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

register_exception_handlers(app, templates)


@app.get("/", include_in_schema=False)
async def get_index() -> RedirectResponse:
    """Send visitors to the author list."""
    return RedirectResponse(url=f"{settings.CATALOG_PREFIX}/authors")
