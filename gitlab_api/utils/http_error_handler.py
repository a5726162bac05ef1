"""HTTP error handler utilities for InternalHttpClient.

This module extracts diagnostics from GitLab error responses.
"""

from typing import Any, Optional

import httpx

REQUEST_ID_HEADERS = [
    "x-request-id",
    "x-correlation-id",
    "correlation-id",
]


def extract_request_id(response: Optional[httpx.Response] = None) -> Optional[str]:
    """Extract the server request ID from response headers.

    Args:
        response: HTTP response object (optional)

    Returns:
        Request ID string if found, None otherwise

    """
    if response is None:
        return None

    for header_name in REQUEST_ID_HEADERS:
        request_id = response.headers.get(header_name)
        if request_id:
            return str(request_id)

    return None


def _flatten_message(message: Any) -> Optional[str]:
    """Flatten GitLab's message field into a single line.

    GitLab returns either a plain string, a list of strings, or a mapping of
    field name to a list of validation errors.

    Examples:
        >>> _flatten_message({"title": ["can't be blank"], "base": ["is invalid"]})
        "title: can't be blank; base: is invalid"

    """
    if message is None:
        return None
    if isinstance(message, str):
        return message
    if isinstance(message, list):
        return ", ".join(str(item) for item in message)
    if isinstance(message, dict):
        parts = []
        for field, errors in message.items():
            if isinstance(errors, list):
                errors = ", ".join(str(error) for error in errors)
            parts.append(f"{field}: {errors}")
        return "; ".join(parts)
    return str(message)


def read_error_body(response: httpx.Response) -> Any:
    """Return the JSON error body if there is one, otherwise the response text."""
    if response.headers.get("content-type", "").startswith("application/json"):
        try:
            return response.json()
        except ValueError:
            pass
    return response.text or None


def parse_error_message(response: httpx.Response) -> Optional[str]:
    """Parse the human readable error message from a GitLab error response.

    Args:
        response: HTTP response object

    Returns:
        Error message if the body carries one, the reason phrase otherwise

    """
    body = read_error_body(response)
    if isinstance(body, dict):
        message = _flatten_message(body.get("message"))
        if message is None:
            message = _flatten_message(body.get("error"))
        if message is not None:
            error_description = body.get("error_description")
            if error_description:
                message = f"{message} ({error_description})"
            return message
    elif isinstance(body, str) and body.strip():
        return body.strip()[:500]

    return response.reason_phrase or None
