"""
GitLabClient - Main entry point of the GitLab API client.

This module contains the GitLabClient class which wires the configuration,
the HTTP dispatcher and the resource API facades together.
"""

import logging
from typing import Optional

import httpx

from .api import ApiClient
from .api.merge_requests_api import MergeRequestApi
from .api.snippets_api import SnippetsApi
from .models.config import ApiVersion, GitLabClientConfig
from .utils.config_loader import load_config
from .utils.http_client import HttpClient

logger = logging.getLogger(__name__)


class GitLabClient:
    """
    Main GitLab client class.

    Provides the resource facades of one GitLab server:
    - merge_requests: MergeRequestApi
    - snippets: SnippetsApi

    The API version is fixed by the configuration for the lifetime of the
    client. Use it as a context manager (or call ``close()``) to release the
    underlying connection pool.
    """

    def __init__(
        self,
        config: GitLabClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize GitLabClient with configuration.

        Args:
            config: Client configuration (server URL, token, API version, ...)
            transport: Optional httpx transport (custom TLS, proxies, tests)
        """
        self.config = config
        self.http_client = HttpClient(config, transport)
        self.api_client = ApiClient(self.http_client)
        logger.debug(f"GitLab client configured for {config.api_url}")

    @classmethod
    def from_env(cls, transport: Optional[httpx.BaseTransport] = None) -> "GitLabClient":
        """Create a client from environment variables (see load_config)."""
        return cls(load_config(), transport)

    @property
    def api_version(self) -> ApiVersion:
        return self.config.api_version

    @property
    def merge_requests(self) -> MergeRequestApi:
        return self.api_client.merge_requests

    @property
    def snippets(self) -> SnippetsApi:
        return self.api_client.snippets

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http_client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
