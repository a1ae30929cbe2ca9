"""
API Gateway proxy helpers.

Reads the parts of a proxy event the handlers route on (method, path, path
id, query string, body) for both REST API (v1) and HTTP API (v2) payloads,
and builds proxy responses. Exceptions raised by the read/write APIs are
turned into responses here:

- ValidationError      -> 400 {error}
- ItemNotFoundError    -> 404 {error}
- ExternalServiceError -> 502 {error, details}
- anything else        -> 500 {error, details}
"""

import base64
import binascii
import json
import logging
from typing import Any, Callable, Dict, Optional
from urllib.parse import unquote

from ..exceptions import ConferenceApiError, ExternalServiceError, ItemNotFoundError, ValidationError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


# =============================================================================
# Responses
# =============================================================================

def json_response(status_code: int, body: Any) -> Dict[str, Any]:
    """Proxy response with a JSON body."""
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(body),
    }


def csv_response(content: str, filename: str) -> Dict[str, Any]:
    """Proxy response serving CSV text as a file download."""
    return {
        "statusCode": 200,
        "headers": {
            "Content-Type": "text/csv",
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
        "body": content,
    }


def error_response(status_code: int, message: str, details: Optional[str] = None) -> Dict[str, Any]:
    """Proxy response with an {error, details?} JSON body."""
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return json_response(status_code, body)


def response_for_error(error: Exception, operation: str) -> Dict[str, Any]:
    """
    Map an exception raised while serving a request to a proxy response.

    Args:
        error: The exception
        operation: What failed, e.g. "update schedule item"
    """
    if isinstance(error, ValidationError):
        logger.warning(f"Rejected request to {operation}: {error.message}")
        return error_response(400, error.message)

    if isinstance(error, ItemNotFoundError):
        logger.info(f"{error.message} ({operation}): {error.key}")
        return error_response(404, error.message)

    details = error.message if isinstance(error, ConferenceApiError) else str(error)
    if isinstance(error, ExternalServiceError):
        logger.error(f"Failed to {operation}: {details}")
        return error_response(502, f"Failed to {operation}", details)

    logger.exception(f"Failed to {operation}")
    return error_response(500, f"Failed to {operation}", details)


def run_operation(operation: str, func: Callable[..., Dict[str, Any]], *args) -> Dict[str, Any]:
    """Call a route function, converting any exception it raises into a response."""
    try:
        return func(*args)
    except Exception as e:
        return response_for_error(e, operation)


# =============================================================================
# Event parsing
# =============================================================================

def get_method(event: Dict[str, Any]) -> str:
    """HTTP method, upper-cased."""
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method", "")
    return method.upper()


def get_path(event: Dict[str, Any]) -> str:
    """Request path without query string."""
    return event.get("rawPath") or event.get("path") or ""


def get_path_param(event: Dict[str, Any], name: str) -> Optional[str]:
    """URL-decoded path parameter, or None when absent or empty."""
    value = (event.get("pathParameters") or {}).get(name)
    if not value:
        return None
    return unquote(value)


def get_query_param(event: Dict[str, Any], *names: str) -> Optional[str]:
    """First non-empty query string value among the given names."""
    params = event.get("queryStringParameters") or {}
    for name in names:
        if params.get(name):
            return params[name]
    return None


def get_raw_body(event: Dict[str, Any]) -> str:
    """Request body as text, decoding base64 bodies."""
    body = event.get("body")
    if body is None:
        return ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValidationError("Request body is not valid base64-encoded UTF-8", original_error=e) from e
    return body


def parse_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode a JSON request body; an empty body is an empty object.

    Raises:
        ValidationError: Body is not valid JSON
    """
    raw = get_raw_body(event)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValidationError("Invalid JSON body", original_error=e) from e
