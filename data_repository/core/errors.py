"""
Data client error definitions

Two families are shared between data clients, the repository and callers:
transport errors (``HttpException`` and subclasses) raised when the data
source rejects or fails a request, and format errors (``DataFormatError``)
raised when returned data cannot be interpreted. The repository re-raises
both unchanged.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorFamily(Enum):
    """Closed set of error families a data client may raise."""

    TRANSPORT = "transport"
    FORMAT = "format"


# --- Transport errors ---

class HttpException(Exception):
    """Base transport error raised by data clients."""
    default_code = "HTTP_ERROR"
    default_status_code = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.code = code or self.default_code
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Returns a dictionary representation for logging and API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


class BadRequestException(HttpException):
    """The data source rejected the request as malformed."""
    default_code = "BAD_REQUEST"
    default_status_code = 400


class UnauthorizedException(HttpException):
    """Authentication required or failed."""
    default_code = "UNAUTHORIZED"
    default_status_code = 401


class ForbiddenException(HttpException):
    """The caller lacks permission for the requested resource."""
    default_code = "FORBIDDEN"
    default_status_code = 403


class NotFoundException(HttpException):
    """The requested resource does not exist."""
    default_code = "NOT_FOUND"
    default_status_code = 404


class ConflictException(HttpException):
    default_code = "CONFLICT"
    default_status_code = 409


class InvalidInputException(HttpException):
    """The request payload failed validation on the data source."""
    default_code = "INVALID_INPUT"
    default_status_code = 422


class ServerException(HttpException):
    default_code = "SERVER_ERROR"
    default_status_code = 500


class OperationFailedException(HttpException):
    """The data source accepted the request but could not complete it."""
    default_code = "OPERATION_FAILED"
    default_status_code = 500


class NetworkException(HttpException):
    """The data source could not be reached."""
    default_code = "NETWORK_ERROR"
    default_status_code = 503


class UnknownException(HttpException):
    default_code = "UNKNOWN_ERROR"
    default_status_code = 500


# --- Format errors ---

class DataFormatError(ValueError):
    """Raised when a data client cannot deserialize or interpret returned data."""

    def __init__(self, message: str, source: Any = None):
        self.message = message
        self.source = source
        super().__init__(message)


def error_family(error: BaseException) -> Optional[ErrorFamily]:
    """Classify an error into its family, or ``None`` if it belongs to neither."""
    if isinstance(error, HttpException):
        return ErrorFamily.TRANSPORT
    if isinstance(error, DataFormatError):
        return ErrorFamily.FORMAT
    return None


__all__ = [
    "ErrorFamily",
    "HttpException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "InvalidInputException",
    "ServerException",
    "OperationFailedException",
    "NetworkException",
    "UnknownException",
    "DataFormatError",
    "error_family",
]
