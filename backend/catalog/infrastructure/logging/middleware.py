"""Middleware attaching a correlation ID to every request."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .config import generate_correlation_id, reset_correlation_id, set_correlation_id

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propagate or generate a correlation ID for request tracing.

    The ID is taken from the ``X-Correlation-ID`` header when present
    (truncated to 8 characters) or generated otherwise. It is stored on
    ``request.state.correlation_id``, in the logging context variable for
    the duration of the request, and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        cid = (request.headers.get(CORRELATION_HEADER) or generate_correlation_id())[:8]
        request.state.correlation_id = cid

        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)

        response.headers[CORRELATION_HEADER] = cid
        return response
