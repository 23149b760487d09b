"""Client for Selectel cloud storage with parallel batch operations."""

from .auth import AuthenticationInterface, SelectelAuthentication, StaticAuthentication
from .core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    CrcFailedError,
    FileNotExistsError,
    FileUnreadableError,
    ParallelOperationError,
    StorageApiError,
    TransportError,
    UnexpectedError,
    UnexpectedHttpStatusError,
    UsageError,
)
from .service import StorageService, get_storage_service
from .storage import Container, File, ServerResource, SymLink
from .utils.http import BatchPool, BatchResult, FailureInfo, HttpClient

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "AuthenticationInterface",
    "BatchPool",
    "BatchResult",
    "ConfigurationError",
    "Container",
    "CrcFailedError",
    "FailureInfo",
    "File",
    "FileNotExistsError",
    "FileUnreadableError",
    "HttpClient",
    "ParallelOperationError",
    "SelectelAuthentication",
    "ServerResource",
    "StaticAuthentication",
    "StorageApiError",
    "StorageService",
    "SymLink",
    "TransportError",
    "UnexpectedError",
    "UnexpectedHttpStatusError",
    "UsageError",
    "get_storage_service",
]
