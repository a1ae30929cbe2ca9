# Base exception class
from .base import ConferenceApiError

# Domain-specific exceptions
from .domain_exceptions import (
    ValidationError,
    ItemNotFoundError,
    ConflictError,
    ConnectionError,
    RetryableError,
    StorageError,
    ExternalServiceError,
)

__all__ = [
    # Base exception
    "ConferenceApiError",

    # Domain exceptions (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "ExternalServiceError",
    "ItemNotFoundError",
    "RetryableError",
    "StorageError",
    "ValidationError",
]
