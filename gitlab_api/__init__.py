"""
gitlab-api-client - typed Python client for the GitLab REST API.

This package exposes GitLab resources (merge requests, snippets, ...) as typed
method calls on top of a shared request dispatcher and a lazy page cursor.
"""

from .api.types import (
    Author,
    Commit,
    Diff,
    MergeRequest,
    MergeRequestFilter,
    MergeRequestState,
    Participant,
    Snippet,
    StateEvent,
    Visibility,
)
from .client import GitLabClient
from .errors import (
    ConfigurationError,
    DecodeError,
    GitLabApiError,
    IndexOutOfRangeError,
    MissingRequiredParameterError,
    TransportError,
    UnexpectedStatusError,
)
from .models.config import ApiVersion, GitLabClientConfig
from .models.optional import Absent, Found
from .utils.config_loader import load_config
from .utils.form import GitLabApiForm, ParameterSet
from .utils.http_client import HttpClient
from .utils.pagination import MAX_ITEMS_PER_PAGE, Pager, PagerState

__version__ = "0.1.0"

__all__ = [
    "Absent",
    "ApiVersion",
    "Author",
    "Commit",
    "ConfigurationError",
    "DecodeError",
    "Diff",
    "Found",
    "GitLabApiError",
    "GitLabApiForm",
    "GitLabClient",
    "GitLabClientConfig",
    "HttpClient",
    "IndexOutOfRangeError",
    "MAX_ITEMS_PER_PAGE",
    "MergeRequest",
    "MergeRequestFilter",
    "MergeRequestState",
    "MissingRequiredParameterError",
    "Pager",
    "PagerState",
    "ParameterSet",
    "Participant",
    "Snippet",
    "StateEvent",
    "TransportError",
    "UnexpectedStatusError",
    "Visibility",
    "load_config",
]
