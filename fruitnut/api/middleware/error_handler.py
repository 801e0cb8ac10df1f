"""Global error handling middleware for consistent error responses."""

import logging
import traceback
from typing import Any, Callable

from fastapi import HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from fruitnut.schemas.common import ErrorResponse
from fruitnut.state.errors import (
    IncompleteProfileError,
    NoActiveProfileError,
    ProfileNotFoundError,
    RoleMismatchError,
)

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for errors shown inline on a screen.

    Subclasses set the status code and error type; the message is what
    the user reads.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "api_error"
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(APIError):
    """Resource not found, or not owned by the active profile."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"
    default_message = "Resource not found"


class ValidationError(APIError):
    """Form input rejected by a business rule."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_type = "validation_error"
    default_message = "Validation error"


class ConflictError(APIError):
    """Request conflicts with the current state of a resource."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"
    default_message = "Conflict"


class AuthenticationError(APIError):
    """Nobody is signed in, or the auth provider refused the credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "authentication_error"
    default_message = "Authentication required"


# Session state errors and the responses they map to
STATE_ERRORS: dict[type[Exception], tuple[int, str]] = {
    NoActiveProfileError: (status.HTTP_409_CONFLICT, "no_active_profile"),
    RoleMismatchError: (status.HTTP_409_CONFLICT, "role_mismatch"),
    IncompleteProfileError: (status.HTTP_409_CONFLICT, "incomplete_profile"),
    ProfileNotFoundError: (status.HTTP_404_NOT_FOUND, "not_found"),
}


def create_error_response(
    error_type: str,
    message: str,
    status_code: int,
    request_id: str | None = None,
) -> JSONResponse:
    """Create a standardized JSON error response.

    Args:
        error_type: Error category for client handling.
        message: Human-readable error description.
        status_code: HTTP status code.
        request_id: Optional request ID for tracing.

    Returns:
        JSONResponse: Formatted error response.
    """
    error_response = ErrorResponse(error=error_type, message=message, request_id=request_id)
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Turn errors raised by the guard and the screen handlers into ErrorResponse JSON.

    Application and session state errors are logged at warning level;
    anything else is logged with its traceback and answered with a
    generic 500 so internals never reach the client.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or formatted error response.
    """
    request_id = request.headers.get("X-Request-ID")

    try:
        return await call_next(request)

    except APIError as e:
        logger.warning(
            "%s %s failed: %s - %s",
            request.method,
            request.url.path,
            e.error_type,
            e.message,
            extra={"request_id": request_id, "status_code": e.status_code},
        )
        return create_error_response(e.error_type, e.message, e.status_code, request_id)

    except tuple(STATE_ERRORS) as e:
        status_code, error_type = STATE_ERRORS[type(e)]
        logger.warning(
            "%s %s rejected by session state: %s - %s",
            request.method,
            request.url.path,
            error_type,
            e,
            extra={"request_id": request_id},
        )
        return create_error_response(error_type, str(e), status_code, request_id)

    except HTTPException as e:
        logger.warning("HTTP exception: %s - %s", e.status_code, e.detail, extra={"request_id": request_id})
        return create_error_response("http_error", str(e.detail), e.status_code, request_id)

    except Exception as e:
        logger.error(
            "Unhandled exception on %s %s: %s\n%s",
            request.method,
            request.url.path,
            e,
            traceback.format_exc(),
            extra={"request_id": request_id},
        )
        return create_error_response(
            "internal_error",
            "An unexpected error occurred",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id,
        )
