"""Server-rendered author pages: list, detail, create, update and delete."""

from typing import Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ...infrastructure.config.settings import get_settings
from ...infrastructure.logging import get_logger
from ...modules.author.validation import validate_author_form
from ...modules.common.exceptions import AuthorNotFoundError
from ..dependencies import AuthorServiceDep, DbSession, SessionFactory
from .templating import render

settings = get_settings()
logger = get_logger(__name__)

router = APIRouter(prefix=settings.CATALOG_PREFIX, tags=["catalog"], default_response_class=HTMLResponse)

AUTHOR_LIST_URL = f"{settings.CATALOG_PREFIX}/authors"

FormField = Annotated[str, Form()]


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/authors")
async def author_list(request: Request, db: DbSession, author_service: AuthorServiceDep) -> Response:
    """Display list of all authors."""
    authors = await author_service.get_authors(db)
    return render(request, "author_list", {"title": "Author List", "author_list": authors})


@router.get("/author/create")
async def author_create_get(request: Request) -> Response:
    """Display the author create form."""
    return render(request, "author_form", {"title": "Create Author"})


@router.post("/author/create")
async def author_create_post(
    request: Request,
    db: DbSession,
    author_service: AuthorServiceDep,
    first_name: FormField = "",
    family_name: FormField = "",
    date_of_birth: FormField = "",
    date_of_death: FormField = "",
) -> Response:
    """Handle author create on POST."""
    result = validate_author_form(
        {
            "first_name": first_name,
            "family_name": family_name,
            "date_of_birth": date_of_birth,
            "date_of_death": date_of_death,
        }
    )

    if not result.is_valid or result.data is None:
        return render(
            request,
            "author_form",
            {"title": "Create Author", "author": result.values, "errors": result.errors},
        )

    author = await author_service.create_author(result.data, db)
    return redirect(author.url)


@router.get("/author/{author_id}")
async def author_detail(
    request: Request,
    author_id: int,
    session_factory: SessionFactory,
    author_service: AuthorServiceDep,
) -> Response:
    """Display detail page for a specific author."""
    author, author_books = await author_service.get_author_with_books(author_id, session_factory)

    if author is None:
        raise AuthorNotFoundError()

    return render(
        request,
        "author_detail",
        {"title": "Author Detail", "author": author, "author_books": author_books},
    )


@router.get("/author/{author_id}/delete")
async def author_delete_get(
    request: Request,
    author_id: int,
    session_factory: SessionFactory,
    author_service: AuthorServiceDep,
) -> Response:
    """Display the author delete confirmation."""
    author, author_books = await author_service.get_author_with_books(author_id, session_factory)

    if author is None:
        return redirect(AUTHOR_LIST_URL)

    return render(
        request,
        "author_delete",
        {"title": "Delete Author", "author": author, "author_books": author_books},
    )


@router.post("/author/{author_id}/delete")
async def author_delete_post(
    request: Request,
    author_id: int,
    db: DbSession,
    session_factory: SessionFactory,
    author_service: AuthorServiceDep,
    authorid: Annotated[int | None, Form()] = None,
) -> Response:
    """Handle author delete on POST.

    The author is only removed when no book references it; otherwise the
    confirmation page is shown again with the blocking books.
    """
    target_id = authorid if authorid is not None else author_id
    author, author_books = await author_service.get_author_with_books(target_id, session_factory)

    if author_books:
        logger.info(
            "Delete blocked by dependent books",
            extra={"author_id": target_id, "book_count": len(author_books)},
        )
        return render(
            request,
            "author_delete",
            {"title": "Delete Author", "author": author, "author_books": author_books},
        )

    await author_service.delete_author(target_id, db)
    return redirect(AUTHOR_LIST_URL)


@router.get("/author/{author_id}/update")
async def author_update_get(
    request: Request,
    author_id: int,
    db: DbSession,
    author_service: AuthorServiceDep,
) -> Response:
    """Display the author update form, pre-populated."""
    author = await author_service.get_author(author_id, db)

    if author is None:
        raise AuthorNotFoundError()

    return render(request, "author_form", {"title": "Update Author", "author": author})


@router.post("/author/{author_id}/update")
async def author_update_post(
    request: Request,
    author_id: int,
    db: DbSession,
    author_service: AuthorServiceDep,
    first_name: FormField = "",
    family_name: FormField = "",
    date_of_birth: FormField = "",
    date_of_death: FormField = "",
) -> Response:
    """Handle author update on POST."""
    result = validate_author_form(
        {
            "first_name": first_name,
            "family_name": family_name,
            "date_of_birth": date_of_birth,
            "date_of_death": date_of_death,
        }
    )

    if not result.is_valid or result.data is None:
        return render(
            request,
            "author_form",
            {"title": "Update Author", "author": {**result.values, "id": author_id}, "errors": result.errors},
        )

    author = await author_service.update_author(author_id, result.data, db)
    return redirect(author.url)
