"""Base class shared by the resource API facades."""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Type, TypeVar

from pydantic import BaseModel

from ..errors import MissingRequiredParameterError
from ..models.config import ApiVersion
from ..models.optional import OptionalResult, fetch_optional
from ..utils.form import GitLabApiForm, ParameterSet
from ..utils.http_client import HttpClient
from ..utils.pagination import Pager, clamp_items_per_page

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R")


class AbstractApi:
    """Common plumbing for facades: version checks, page params, pagers."""

    def __init__(self, http_client: HttpClient):
        """
        Initialize API facade.

        Args:
            http_client: HttpClient instance
        """
        self.http_client = http_client

    @property
    def api_version(self) -> ApiVersion:
        return self.http_client.api_version

    def is_api_version(self, api_version: ApiVersion) -> bool:
        return self.http_client.is_api_version(api_version)

    @property
    def default_per_page(self) -> int:
        """Configured default page size, capped at the platform ceiling."""
        return clamp_items_per_page(self.http_client.config.default_per_page)

    @staticmethod
    def require(name: str, value: Any) -> Any:
        """Return ``value`` or fail before any request if it is None."""
        if value is None:
            raise MissingRequiredParameterError(name)
        return value

    def page_params(
        self, page: Optional[int] = None, per_page: Optional[int] = None
    ) -> ParameterSet:
        """Build page/per_page query parameters (per_page defaults to the config)."""
        if per_page is None:
            per_page = self.default_per_page
        return GitLabApiForm().with_page_params(page, per_page).build()

    def create_pager(
        self,
        element_type: Type[M],
        items_per_page: Optional[int],
        params: Optional[Mapping],
        *path_segments: Any,
    ) -> Pager[M]:
        """Create a Pager over a list endpoint of this facade."""
        if items_per_page is None:
            items_per_page = self.default_per_page
        return Pager(self.http_client, element_type, items_per_page, params, *path_segments)

    @staticmethod
    def optional(fetch: Callable[[], R]) -> OptionalResult[R]:
        """Run a lookup, mapping a 404 to Absent."""
        return fetch_optional(fetch)
