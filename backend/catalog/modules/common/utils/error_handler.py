"""Turn domain, routing and data-access errors into responses.

Requests under the API prefix get ``{"detail": ...}`` JSON; catalog pages get
the ``error.html`` view with the same status code.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ....infrastructure.config.settings import get_settings
from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_STATUS_CODES
from ..exceptions import DomainError

logger = get_logger(__name__)


def map_exception(error: DomainError) -> HTTPException:
    """Map a domain error to an HTTP error carrying the same message."""
    for exception_class, status_code in EXCEPTION_STATUS_CODES.items():
        if isinstance(error, exception_class):
            return HTTPException(status_code=status_code, detail=str(error))

    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Unexpected error: {error}")


def register_exception_handlers(app: FastAPI, templates: Jinja2Templates) -> None:
    api_prefix = get_settings().API_PREFIX

    def error_response(request: Request, status_code: int, message: str, error: Optional[Exception] = None) -> Response:
        if request.url.path.startswith(api_prefix):
            return JSONResponse(status_code=status_code, content={"detail": message})

        context = {
            "title": "Error",
            "message": message,
            "status_code": status_code,
            "error": repr(error) if get_settings().DEBUG and error is not None else None,
        }
        return templates.TemplateResponse(request, "error.html", context, status_code=status_code)

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> Response:
        http_exception = map_exception(exc)
        logger.info(
            f"{request.method} {request.url.path} -> {http_exception.status_code}: {http_exception.detail}",
            extra={"error_type": type(exc).__name__},
        )
        return error_response(request, http_exception.status_code, str(http_exception.detail), exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        return error_response(request, exc.status_code, str(exc.detail), exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
        # A path segment that is not a valid id points at nothing.
        if any(error.get("loc", ("",))[0] == "path" for error in exc.errors()):
            return error_response(request, status.HTTP_404_NOT_FOUND, "Not Found", exc)
        if request.url.path.startswith(api_prefix):
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": jsonable_encoder(exc.errors())}
            )
        return error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request", exc)

    @app.exception_handler(SQLAlchemyError)
    async def data_access_exception_handler(request: Request, exc: SQLAlchemyError) -> Response:
        logger.error(f"Data access error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", exc)
