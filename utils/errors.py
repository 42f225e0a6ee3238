"""
Application error taxonomy and the decorator that keeps controllers from
leaking internals. main.py maps every AppError onto a JSON response.
"""
import functools
import logging
from typing import Any, Dict, List, Optional

from fastapi import status

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InvalidToken(Unauthorized):
    message = "Invalid or expired token"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class ServerMisconfigured(AppError):
    message = "Server configuration error"


class InternalError(AppError):
    message = "Internal server error"


class StoreConnectionError(InternalError):
    message = "Database unavailable"


def shielded(message: str):
    """
    Wrap a controller so that anything other than an AppError is logged
    with its traceback and re-raised as InternalError(message).
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                raise
            except Exception as exc:
                logger.exception("%s: %s", message, exc)
                raise InternalError(message) from exc
        return wrapper
    return decorator


def validation_message(errors: List[Dict[str, Any]]) -> str:
    """Client-facing summary of the first pydantic/FastAPI validation error."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    loc = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query"))
    return f"Invalid value for {loc}" if loc else "Invalid request"
