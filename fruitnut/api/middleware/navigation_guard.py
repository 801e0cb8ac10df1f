"""Navigation guard middleware keeping requests on the screen the session allows."""

import logging
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from fruitnut.state.navigation import resolve_redirect

logger = logging.getLogger(__name__)

# Prefixes served regardless of the session state
UNGUARDED_PREFIXES = ("/health", "/session", "/docs", "/redoc", "/openapi.json")

# Seconds a client should wait before retrying while the session loads
LOADING_RETRY_AFTER = 1


def is_guarded(path: str) -> bool:
    """Check whether a request path is a screen subject to the guard."""
    return not any(path == prefix or path.startswith(prefix + "/") for prefix in UNGUARDED_PREFIXES)


async def navigation_guard_middleware(request: Request, call_next: Callable) -> Response:
    """Redirect screen requests the session state does not allow.

    While the session is loading no decision is made and the request is
    answered with 503 and a Retry-After header. A request for the wrong
    screen gets a 303 redirect to the screen the user must be on; an
    allowed request is recorded as the router's current screen.

    Args:
        request: The incoming request.
        call_next: The next middleware/handler in the chain.

    Returns:
        Response: Loading response, redirect, or the handler's response.
    """
    path = request.url.path
    session = getattr(request.app.state, "app_session", None)
    router = getattr(request.app.state, "router", None)

    if session is None or router is None or not is_guarded(path):
        return await call_next(request)

    if session.is_loading:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "loading", "message": "Session is loading, try again shortly."},
            headers={"Retry-After": str(LOADING_RETRY_AFTER)},
        )

    target = resolve_redirect(session.navigation_input(path))
    if target is not None and target != path:
        logger.info("Guard redirect %s %s -> %s", request.method, path, target)
        router.replace(target)
        return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)

    router.push(path)
    return await call_next(request)
