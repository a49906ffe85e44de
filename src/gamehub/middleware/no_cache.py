"""Disable HTTP caching for API responses.

Leaderboards and session history are recomputed on every read, so neither
browsers nor intermediaries may keep a copy.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Attach no-store headers to every response under ``prefix``."""

    def __init__(self, app, prefix: str = "/api") -> None:  # noqa: ANN001
        super().__init__(app)
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self.prefix):
            response.headers.update(NO_CACHE_HEADERS)
        return response
