"""Per-client request limits for the anonymous form posts.

Security: /login, /registration and /email-sender are reachable without a
session, so they are keyed by client IP to slow down password guessing and
mail flooding. Views (GET) and the /user/* pages are not limited.

Each decorated endpoint must accept ``request: Request`` so slowapi can find
the client address, and reads its limit string from settings at call time:

    @router.post(LOGIN_URI)
    @limiter.limit(lambda: settings.rate_limit_login)
    async def login(request: Request, ...):
"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from mydiary.core.config import settings
from mydiary.core.responses import ErrorDetail, ErrorResponse

# Used when the exceeded limit does not expose its window
DEFAULT_RETRY_AFTER_SECONDS = 60

# In-memory counters: one process, one set of windows
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


def retry_after_seconds(exc: RateLimitExceeded) -> int:
    """Length of the window of the limit that was hit, in seconds.

    "5/15minute" gives 900. Falls back to DEFAULT_RETRY_AFTER_SECONDS when
    the exception carries no parsed limit.
    """
    wrapped = getattr(exc, "limit", None)
    item = getattr(wrapped, "limit", None)
    if item is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    return int(item.get_expiry())


def rate_limit_exceeded_handler(
    _request: Request,
    exc: RateLimitExceeded,
) -> Response:
    """Turn a RateLimitExceeded into a 429 in the error envelope.

    Args:
        _request: The incoming request.
        exc: The rate limit exception.

    Returns:
        JSONResponse with status 429 and a Retry-After header equal to the
        limit's window.
    """
    return JSONResponse(
        status_code=429,
        content=ErrorResponse(
            error=ErrorDetail(
                code="RATE_LIMITED",
                message=f"Too many requests: {exc.detail}",
            )
        ).model_dump(),
        headers={"Retry-After": str(retry_after_seconds(exc))},
    )
