"""
Application exception classes and the FastAPI handlers that render them.
"""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.utils import sanitize_error_message

logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = sanitize_error_message(detail)


class FieldValidationError(AppException):
    """A required request field is missing. Raised before any remote call."""
    status_code = status.HTTP_400_BAD_REQUEST


class RecordNotFoundError(AppException):
    """No row holds the requested key."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, key: str, sheet_name: str, column_label: str = "D"):
        super().__init__(f'Name "{key}" not found in column {column_label} of sheet "{sheet_name}"')
        self.key = key
        self.sheet_name = sheet_name


class RemoteServiceError(AppException):
    """Transport, quota or response failure from Google Sheets or Twilio."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AuthenticationError(AppException):
    """Credential or identifier mismatch during login."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class DuplicateRecordError(AppException):
    status_code = status.HTTP_409_CONFLICT


def require_fields(payload: dict, *names: str):
    """Raises FieldValidationError naming every missing or empty field."""
    missing = [name for name in names if payload.get(name) in (None, "")]
    if missing:
        raise FieldValidationError(f"Missing required fields: {', '.join(missing)}")


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions not already rendered by a route.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: {"error": <sanitized detail>}
    """
    logger.error(f"Application error on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail}
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
