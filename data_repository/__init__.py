"""
Generic data repository over pluggable async data clients
"""

from data_repository.clients.data_client import DataClient
from data_repository.core.errors import (
    BadRequestException,
    ConflictException,
    DataFormatError,
    ErrorFamily,
    ForbiddenException,
    HttpException,
    InvalidInputException,
    NetworkException,
    NotFoundException,
    OperationFailedException,
    ServerException,
    UnauthorizedException,
    UnknownException,
    error_family,
)
from data_repository.core.events import BroadcastConfig, EntitySubscription, EntityUpdateBroadcaster
from data_repository.models.schemas import (
    PaginatedResponse,
    PaginationOptions,
    ResponseMetadata,
    SortOption,
    SortOrder,
    SuccessApiResponse,
)
from data_repository.repositories.data_repository import DataRepository

__version__ = "1.0.0"

__all__ = [
    "DataClient",
    "DataRepository",
    "BroadcastConfig",
    "EntitySubscription",
    "EntityUpdateBroadcaster",
    "ResponseMetadata",
    "SuccessApiResponse",
    "PaginatedResponse",
    "PaginationOptions",
    "SortOption",
    "SortOrder",
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
