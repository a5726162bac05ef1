"""
SDK exceptions and error handling.

This module defines the exception taxonomy raised by the GitLab API client.
Every failure surfaces synchronously as a subclass of GitLabApiError.
"""

from typing import Any, Iterable, Optional


class GitLabApiError(Exception):
    """Base exception for GitLab API client errors."""

    def __init__(
        self, message: str, status_code: int | None = None, error_body: Any | None = None
    ):
        """
        Initialize GitLab API error.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
            error_body: Decoded (or raw text) error response body
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_body = error_body


class MissingRequiredParameterError(GitLabApiError):
    """Raised before any network call when a required parameter is absent."""

    def __init__(self, parameter_name: str):
        super().__init__(f"{parameter_name} is required and cannot be null")
        self.parameter_name = parameter_name


class TransportError(GitLabApiError):
    """Raised when the HTTP exchange fails below the protocol level.

    Covers timeouts, refused connections and DNS failures. The originating
    httpx exception is available as ``cause``.
    """

    def __init__(self, cause: Exception, url: Optional[str] = None):
        message = f"Request failed: {cause}"
        if url:
            message = f"Request to {url} failed: {cause}"
        super().__init__(message)
        self.cause = cause
        self.url = url


class UnexpectedStatusError(GitLabApiError):
    """Raised when the server answers with a status code that was not accepted."""

    def __init__(
        self,
        actual: int,
        expected: Iterable[int],
        body: Any = None,
        error_message: Optional[str] = None,
        request_id: Optional[str] = None,
    ):
        self.actual = actual
        self.expected = tuple(sorted(int(code) for code in expected))
        self.body = body
        self.error_message = error_message
        self.request_id = request_id

        expected_text = ", ".join(str(code) for code in self.expected)
        message = f"HTTP {actual} (expected {expected_text})"
        if error_message:
            message = f"{message}: {error_message}"
        super().__init__(message, status_code=actual, error_body=body)


class DecodeError(GitLabApiError):
    """Raised when a response payload does not match the expected type."""

    def __init__(self, target_type: str, cause: Exception):
        super().__init__(f"Could not decode response as {target_type}: {cause}")
        self.target_type = target_type
        self.cause = cause


class IndexOutOfRangeError(GitLabApiError, IndexError):
    """Raised by Pager random access beyond the known (or fetched) items."""

    def __init__(self, index: int, total_items: int = -1):
        if total_items >= 0:
            message = f"Index {index} out of range (total items: {total_items})"
        else:
            message = f"Index {index} out of range"
        super().__init__(message)
        self.index = index
        self.total_items = total_items


class ConfigurationError(GitLabApiError):
    """Raised when configuration is invalid."""

    pass
