"""Resource API layer with typed interfaces.

Provides typed interfaces for GitLab API calls, organized by resource.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..utils.http_client import HttpClient


class ApiClient:
    """Aggregates the resource API facades over one HttpClient."""

    def __init__(self, http_client: HttpClient):
        """Initialize API client.

        Args:
            http_client: HttpClient instance

        """
        from .merge_requests_api import MergeRequestApi
        from .snippets_api import SnippetsApi

        self.http_client = http_client
        self.merge_requests = MergeRequestApi(http_client)
        self.snippets = SnippetsApi(http_client)


def __getattr__(name: str):
    """Lazy import of API classes to avoid a circular import with utils.pagination."""
    if name == "AbstractApi":
        from .abstract_api import AbstractApi

        return AbstractApi
    if name == "MergeRequestApi":
        from .merge_requests_api import MergeRequestApi

        return MergeRequestApi
    if name == "SnippetsApi":
        from .snippets_api import SnippetsApi

        return SnippetsApi
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["AbstractApi", "ApiClient", "MergeRequestApi", "SnippetsApi"]
