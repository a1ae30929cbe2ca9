"""
Domain-Specific Exceptions for the Conference API

All exceptions extend ConferenceApiError. The API layer maps them to HTTP
status codes:

1. Request Validation Errors  -> 400
2. Resource Not Found Errors  -> 404
3. External Service Errors    -> 502
4. Storage and Retry Errors   -> 500 (ConnectionError, ConflictError, RetryableError, StorageError)
"""

from typing import Any, Dict, Optional

from .base import ConferenceApiError


# =============================================================================
# Request Validation Errors
# =============================================================================

class ValidationError(ConferenceApiError):
    """Raised when request input fails validation.

    Used for:
    - Missing required fields on create
    - Unparsable startTime values
    - Malformed CSV uploads (missing header columns, empty body)
    - Request body validation failures
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Resource Not Found Errors
# =============================================================================

class ItemNotFoundError(ConferenceApiError):
    """Raised when a session or speaker lookup by id finds no row."""

    def __init__(self, entity_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            entity_name: Display name of the entity (e.g., 'Schedule item')
            key: The key that was not found
            original_error: The original exception that caused this error
        """
        self.entity_name = entity_name
        self.key = key
        message = f"{entity_name} not found"
        context = {
            'key': key
        }
        super().__init__(message, original_error, context)


# =============================================================================
# Conflict and Conditional Errors
# =============================================================================

class ConflictError(ConferenceApiError):
    """Raised when a conditional write or transaction is rejected by the store."""

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize conflict error.

        Args:
            message: Human-readable error message
            resource_id: ID of the conflicting resource (e.g., session id)
            original_error: The original exception that caused this error
        """
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


# =============================================================================
# Infrastructure and External Service Errors
# =============================================================================

class ConnectionError(ConferenceApiError):
    """Raised when the table store cannot be reached or rejects credentials."""

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(ConferenceApiError):
    """Raised when the table store throttles or is temporarily unavailable."""

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)


class StorageError(ConferenceApiError):
    """Raised when the table store rejects a request or returns a row that cannot be read.

    Used for:
    - DynamoDB ValidationException (oversized items, malformed expressions)
    - Stored rows that do not convert to a domain model
    """

    def __init__(self, message: str, table_name: Optional[str] = None, original_error: Optional[Exception] = None):
        self.table_name = table_name
        context = {}
        if table_name:
            context['table_name'] = table_name
        super().__init__(message, original_error, context)


class ExternalServiceError(ConferenceApiError):
    """Raised when a third-party HTTP service (YouTube Data API) fails.

    Used for:
    - Transport failures (DNS, timeouts, refused connections)
    - Non-2xx responses, carrying the upstream error message
    """

    def __init__(self, message: str, service: str, status_code: Optional[int] = None, original_error: Optional[Exception] = None):
        self.service = service
        self.status_code = status_code
        context = {'service': service}
        if status_code is not None:
            context['status_code'] = status_code
        super().__init__(message, original_error, context)
