"""Configuration, pagination and result models."""

from .config import ApiVersion, GitLabClientConfig
from .optional import Absent, Found, OptionalResult, fetch_optional
from .pagination import PageInfo

__all__ = [
    "Absent",
    "ApiVersion",
    "Found",
    "GitLabClientConfig",
    "OptionalResult",
    "PageInfo",
    "fetch_optional",
]
