"""
Public HTTP client utility for GitLab communication with request logging.

This module provides the public HTTP client interface that wraps
InternalHttpClient and logs every request. Credentials are masked with
DataMasker before logging.
"""

import logging
import time
from collections.abc import Mapping
from typing import Any, Callable, Optional

import httpx

from ..models.config import ApiVersion, GitLabClientConfig
from .http_client_logging import (
    calculate_request_metrics,
    log_http_request_audit,
    log_http_request_debug,
)
from .internal_http_client import ExpectedStatus, HttpMethod, InternalHttpClient

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Public HTTP client for GitLab REST API communication with logging.

    This class wraps InternalHttpClient and adds:
    - An audit log line for every request (method, URL, status, duration)
    - Debug logging of parameters and headers when log_level is 'debug'
    - Masking of credentials in everything it logs
    """

    def __init__(
        self, config: GitLabClientConfig, transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize public HTTP client with configuration.

        Args:
            config: GitLab client configuration
            transport: Optional httpx transport injected into the underlying client
        """
        self.config = config
        self._internal_client = InternalHttpClient(config, transport)

    @property
    def api_version(self) -> ApiVersion:
        """API version fixed by the configuration."""
        return self.config.api_version

    def is_api_version(self, api_version: ApiVersion) -> bool:
        """Check whether this client talks to the given API version."""
        return self.config.api_version == api_version

    def close(self) -> None:
        """Close the HTTP client."""
        self._internal_client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def build_url(self, *path_segments: Any) -> str:
        """Build the absolute versioned URL for the given path segments."""
        return self._internal_client.build_url(*path_segments)

    def _log_http_request(
        self,
        method: str,
        url: str,
        params: Optional[Mapping],
        response: Optional[httpx.Response],
        error: Optional[Exception],
        start_time: float,
    ) -> None:
        """
        Log HTTP request with audit and optional debug logging.

        Args:
            method: HTTP method
            url: Request URL
            params: Request parameters
            response: Response (if successful)
            error: Exception (if request failed)
            start_time: Request start time
        """
        try:
            duration_ms, status_code = calculate_request_metrics(start_time, response, error)
            log_http_request_audit(logger, method, url, duration_ms, status_code, error)
            if self.config.log_level == "debug":
                client = self._internal_client.client
                log_http_request_debug(
                    logger,
                    method,
                    url,
                    dict(params) if params else None,
                    client.headers if client is not None else None,
                    response,
                )
        except Exception:
            # Logging must never break a request
            logger.debug("Request logging failed", exc_info=True)

    def _execute_with_logging(
        self,
        method: str,
        url: str,
        request_func: Callable[[], httpx.Response],
        params: Optional[Mapping] = None,
    ) -> httpx.Response:
        """
        Execute HTTP request with logging.

        Args:
            method: HTTP method name
            url: Request URL
            request_func: Function performing the request
            params: Request parameters (for logging only)

        Returns:
            The un-decoded httpx.Response

        Raises:
            GitLabApiError: If request fails
        """
        start_time = time.perf_counter()
        try:
            response = request_func()
        except Exception as e:
            self._log_http_request(method, url, params, None, e, start_time)
            raise
        self._log_http_request(method, url, params, response, None, start_time)
        return response

    def request(
        self,
        method: HttpMethod,
        expected_status: ExpectedStatus,
        params: Optional[Mapping] = None,
        *path_segments: Any,
        files: Optional[Any] = None,
    ) -> httpx.Response:
        """
        Dispatch a request with logging.

        Args:
            method: HTTP method
            expected_status: Accepted status code(s)
            params: Query parameters (GET/DELETE) or form fields (POST/PUT)
            *path_segments: Path segments appended to the API base URL
            files: Multipart files for file-bearing POST/PUT calls

        Returns:
            The un-decoded httpx.Response

        Raises:
            MissingRequiredParameterError: If a path segment is None
            UnexpectedStatusError: If the status code is not accepted
            TransportError: If the exchange fails at the network level

        Examples:
            >>> response = client.http_client.request(
            ...     "GET", httpx.codes.OK, {"state": "opened"}, "projects", 5, "merge_requests"
            ... )
        """
        url = self._internal_client.build_url(*path_segments)

        def _request():
            return self._internal_client.send(method, url, expected_status, params, files=files)

        return self._execute_with_logging(method, url, _request, params)

    def get(
        self, expected_status: ExpectedStatus, params: Optional[Mapping] = None, *path_segments: Any
    ) -> httpx.Response:
        """Make GET request; parameters go in the query string."""
        return self.request("GET", expected_status, params, *path_segments)

    def post(
        self,
        expected_status: ExpectedStatus,
        params: Optional[Mapping] = None,
        *path_segments: Any,
        files: Optional[Any] = None,
    ) -> httpx.Response:
        """Make POST request; parameters go in a form-encoded body."""
        return self.request("POST", expected_status, params, *path_segments, files=files)

    def put(
        self,
        expected_status: ExpectedStatus,
        params: Optional[Mapping] = None,
        *path_segments: Any,
        files: Optional[Any] = None,
    ) -> httpx.Response:
        """Make PUT request; parameters go in a form-encoded body."""
        return self.request("PUT", expected_status, params, *path_segments, files=files)

    def delete(
        self, expected_status: ExpectedStatus, params: Optional[Mapping] = None, *path_segments: Any
    ) -> httpx.Response:
        """Make DELETE request; parameters go in the query string."""
        return self.request("DELETE", expected_status, params, *path_segments)

    def get_url(self, url: str, expected_status: ExpectedStatus) -> httpx.Response:
        """
        Make GET request to an absolute URL, e.g. a pagination Link.

        Args:
            url: Absolute URL including its query string
            expected_status: Accepted status code(s)

        Returns:
            The un-decoded httpx.Response
        """

        def _get_url():
            return self._internal_client.send("GET", url, expected_status)

        return self._execute_with_logging("GET", url, _get_url)
