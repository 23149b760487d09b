# Core: errors, logging and configuration
from .exceptions import (
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
from .logging_config import configure_structlog, mask_secret
