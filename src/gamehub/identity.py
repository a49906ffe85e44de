"""Identity boundary: the opaque user id supplied by the upstream auth provider.

The provider (and token verification) lives outside this service; requests
reach us with the already-verified user id in a trusted header.
"""

from fastapi import Request

from gamehub.config import get_settings
from gamehub.errors import NotAuthenticated


def get_identity(request: Request) -> str:
    """Return the caller's user id, or raise 401 when the header is absent (FastAPI dependency)."""
    user_id = request.headers.get(get_settings().identity_header, "").strip()
    if not user_id:
        msg = "Unauthorized"
        raise NotAuthenticated(msg)
    return user_id
