"""
Exception hierarchy for the Selectel storage client.
"""

from typing import Any, List, Optional, Tuple


class StorageApiError(Exception):
    """Base class for every error raised by this library."""


class UsageError(StorageApiError, ValueError):
    """Raised when the library is called with missing or invalid arguments."""


class ConfigurationError(StorageApiError):
    """Raised when configuration cannot be loaded or is incomplete."""


class AuthenticationError(StorageApiError):
    """Raised when the storage URL or auth token cannot be obtained."""


class UnexpectedError(StorageApiError):
    """Raised for failures that do not fit any other category."""


class TransportError(StorageApiError):
    """Raised when a request fails before any HTTP response is received."""

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original


class FileNotExistsError(StorageApiError, FileNotFoundError):
    """Local file backing a descriptor does not exist."""

    def __init__(self, local_name: Optional[str]):
        super().__init__(f"File '{local_name}' does not exist")
        self.local_name = local_name


class FileUnreadableError(StorageApiError, PermissionError):
    """Local file backing a descriptor exists but cannot be read."""

    def __init__(self, local_name: Optional[str]):
        super().__init__(f"File '{local_name}' is not readable")
        self.local_name = local_name


class CrcFailedError(StorageApiError):
    """Server rejected an upload because the ETag did not match the content."""

    def __init__(self, local_name: Optional[str]):
        super().__init__(f"Checksum verification failed for file '{local_name}'")
        self.local_name = local_name


class UnexpectedHttpStatusError(StorageApiError):
    """Server answered with a status code the operation does not expect."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        super().__init__(f"Unexpected HTTP status {status_code}: {reason}")
        self.status_code = status_code
        self.reason = reason


class ParallelOperationError(StorageApiError):
    """
    Raised once per batch call when at least one item fell outside the
    batch's success statuses.

    Attributes:
        operation: Name of the batch operation (e.g. "uploadFiles")
        failures: List of (descriptor, FailureInfo) pairs
    """

    def __init__(self, operation: str, failures: List[Tuple[Any, Any]]):
        self.operation = operation
        self.failures = list(failures)
        names = ", ".join(
            str(getattr(resource, "server_name", resource)) for resource, _ in self.failures
        )
        super().__init__(
            f"Parallel operation '{operation}' failed for {len(self.failures)} item(s): {names}"
        )
