"""Internal HTTP client utility for GitLab communication.

This module provides the request dispatcher: it turns a logical operation
(method, path segments, parameters, accepted status codes) into an httpx call
and returns the raw response, or raises a typed error. This class is not
meant to be used directly - use the public HttpClient class instead which
adds request logging.
"""

from collections.abc import Mapping
from typing import Any, FrozenSet, Iterable, Literal, Optional, Union
from urllib.parse import quote

import httpx

from ..errors import MissingRequiredParameterError, TransportError, UnexpectedStatusError
from ..models.config import ApiVersion, GitLabClientConfig
from .form import EMPTY_PARAMS, GitLabApiForm, ParameterSet
from .http_error_handler import extract_request_id, parse_error_message, read_error_body

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
ExpectedStatus = Union[int, Iterable[int]]

PRIVATE_TOKEN_HEADER = "PRIVATE-TOKEN"

# Methods whose parameters travel in the query string rather than the body
QUERY_METHODS = frozenset({"GET", "DELETE"})


def normalize_expected_status(expected_status: ExpectedStatus) -> FrozenSet[int]:
    """Normalize a status code or collection of status codes to a frozenset."""
    if isinstance(expected_status, int):
        return frozenset({int(expected_status)})
    codes = frozenset(int(code) for code in expected_status)
    if not codes:
        raise ValueError("At least one expected status code is required")
    return codes


def to_parameter_set(params: Optional[Mapping]) -> ParameterSet:
    """Accept a ParameterSet, a plain mapping, or None."""
    if params is None:
        return EMPTY_PARAMS
    if isinstance(params, ParameterSet):
        return params
    return GitLabApiForm().with_params(params).build()


def encode_path_segment(segment: Any) -> str:
    """URL-encode a single path segment; integers pass through as decimal."""
    if segment is None:
        raise MissingRequiredParameterError("path segment")
    if isinstance(segment, bool):
        raise TypeError("Path segments must be strings or integers")
    if isinstance(segment, int):
        return str(segment)
    return quote(str(segment), safe="")


class InternalHttpClient:
    """Internal HTTP client for GitLab REST API communication.

    Owns the httpx.Client, builds versioned URLs, validates status codes and
    translates transport failures. Wrapped by HttpClient which adds logging.
    """

    def __init__(
        self, config: GitLabClientConfig, transport: Optional[httpx.BaseTransport] = None
    ):
        """Initialize internal HTTP client with configuration.

        Args:
            config: GitLab client configuration
            transport: Optional httpx transport (TLS, proxies, test doubles)

        """
        self.config = config
        self.transport = transport
        self.client: Optional[httpx.Client] = None

    @property
    def api_version(self) -> ApiVersion:
        return self.config.api_version

    def _initialize_client(self) -> httpx.Client:
        """Initialize HTTP client if not already initialized."""
        if self.client is None:
            headers = {"Accept": "application/json"}
            if self.config.private_token:
                headers[PRIVATE_TOKEN_HEADER] = self.config.private_token
            self.client = httpx.Client(
                timeout=self.config.timeout,
                headers=headers,
                transport=self.transport,
            )
        return self.client

    def close(self) -> None:
        """Close the HTTP client."""
        if self.client is not None:
            try:
                self.client.close()
            finally:
                self.client = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def build_path(self, *path_segments: Any) -> str:
        """Join path segments with '/', encoding each one individually."""
        return "/".join(encode_path_segment(segment) for segment in path_segments)

    def build_url(self, *path_segments: Any) -> str:
        """Build the absolute versioned URL for the given path segments."""
        path = self.build_path(*path_segments)
        return f"{self.config.api_url}/{path}" if path else self.config.api_url

    def _create_unexpected_status_error(
        self, response: httpx.Response, expected: FrozenSet[int]
    ) -> UnexpectedStatusError:
        """Create UnexpectedStatusError with the parsed GitLab diagnostics."""
        return UnexpectedStatusError(
            actual=response.status_code,
            expected=expected,
            body=read_error_body(response),
            error_message=parse_error_message(response),
            request_id=extract_request_id(response),
        )

    def send(
        self,
        method: HttpMethod,
        url: str,
        expected_status: ExpectedStatus,
        params: Optional[Mapping] = None,
        files: Optional[Any] = None,
    ) -> httpx.Response:
        """Send a request to an absolute URL and validate the status.

        Args:
            method: HTTP method
            url: Absolute request URL
            expected_status: Accepted status code(s)
            params: Query parameters (GET/DELETE) or form fields (POST/PUT)
            files: Multipart files for file-bearing POST/PUT calls

        Returns:
            The un-decoded httpx.Response

        Raises:
            UnexpectedStatusError: If the status code is not accepted
            TransportError: If the exchange fails at the network level or the
                URL cannot be parsed

        """
        method_upper = method.upper()
        if method_upper not in ("GET", "POST", "PUT", "DELETE"):
            raise ValueError(f"Unsupported HTTP method: {method}")

        expected = normalize_expected_status(expected_status)
        param_set = to_parameter_set(params)
        request_kwargs: dict[str, Any] = {}
        if method_upper in QUERY_METHODS:
            if param_set:
                request_kwargs["params"] = param_set.as_query_params()
        else:
            if param_set:
                request_kwargs["data"] = param_set.as_form_body()
            if files is not None:
                request_kwargs["files"] = files

        client = self._initialize_client()
        try:
            response = client.request(method_upper, url, **request_kwargs)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(e, url) from e

        if response.status_code not in expected:
            raise self._create_unexpected_status_error(response, expected)

        return response

    def request(
        self,
        method: HttpMethod,
        expected_status: ExpectedStatus,
        params: Optional[Mapping] = None,
        *path_segments: Any,
        files: Optional[Any] = None,
    ) -> httpx.Response:
        """Dispatch a request against the versioned API base URL.

        Args:
            method: HTTP method
            expected_status: Accepted status code(s)
            params: Query parameters (GET/DELETE) or form fields (POST/PUT)
            *path_segments: Path segments appended to the API base URL
            files: Multipart files for file-bearing POST/PUT calls

        Returns:
            The un-decoded httpx.Response

        """
        url = self.build_url(*path_segments)
        return self.send(method, url, expected_status, params, files=files)
