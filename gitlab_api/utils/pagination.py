"""Pagination utilities for the GitLab API client.

This module provides the Pager, a lazy page cursor over a paginated GitLab
list endpoint, plus the helpers the facades use to build page parameters.
"""

import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Iterator, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from ..api.response_utils import decode_list
from ..errors import IndexOutOfRangeError
from ..models.pagination import PageInfo
from .form import PAGE_PARAM, PER_PAGE_PARAM
from .internal_http_client import to_parameter_set

if TYPE_CHECKING:
    from .http_client import HttpClient

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Platform ceiling; larger requests are capped rather than rejected
MAX_ITEMS_PER_PAGE = 100


def clamp_items_per_page(items_per_page: int) -> int:
    """Clamp a requested page size to [1, MAX_ITEMS_PER_PAGE].

    Examples:
        >>> clamp_items_per_page(500)
        100
        >>> clamp_items_per_page(0)
        1

    """
    return max(1, min(int(items_per_page), MAX_ITEMS_PER_PAGE))


class PagerState(str, Enum):
    """Lifecycle of a Pager's cursor."""

    UNFETCHED = "unfetched"
    BUFFERED = "buffered"
    EXHAUSTED = "exhausted"


class Pager(Generic[T]):
    """Lazy page cursor over a paginated GitLab list endpoint.

    Nothing is fetched at construction. Pages are fetched on demand by
    ``first()``, ``next()``, ``page()``, ``get()`` and the total-count
    accessors; only the most recently fetched page is kept in memory.

    Iterating a Pager yields pages (lists of items) starting from page 1;
    use ``stream()`` or ``all()`` for items.

    The total item count reported by the first response is treated as
    authoritative for the lifetime of the Pager; items added or removed on
    the server meanwhile can shift absolute indexes.

    A Pager is not thread-safe: its cursor and buffer are mutated by every
    fetch. Independent Pagers can be used from different threads.

    Examples:
        >>> pager = client.merge_requests.get_project_merge_requests_pager(5, 50)
        >>> pager.get_total_items()
        250
        >>> pager.get(249).iid
        1

    """

    def __init__(
        self,
        http_client: "HttpClient",
        element_type: Type[T],
        items_per_page: int,
        params: Optional[Mapping] = None,
        *path_segments: Any,
    ):
        """Initialize the Pager.

        Args:
            http_client: Dispatcher used for every page fetch
            element_type: Pydantic model of the list elements
            items_per_page: Requested page size, capped at MAX_ITEMS_PER_PAGE
            params: Extra query parameters sent with every page request
            *path_segments: Path of the list endpoint

        """
        self._http_client = http_client
        self._element_type = element_type
        self._items_per_page = clamp_items_per_page(items_per_page)
        if self._items_per_page != items_per_page:
            logger.debug(
                f"items_per_page {items_per_page} adjusted to {self._items_per_page}"
            )
        self._params = to_parameter_set(params)
        self._path_segments = path_segments

        self._current_page = 0
        self._current_items: List[T] = []
        self._total_items = -1
        self._total_pages = -1
        self._next_page = -1
        self._next_link: Optional[str] = None
        self._has_link_header = False

    def __repr__(self) -> str:
        return (
            f"Pager({self._element_type.__name__}, page={self._current_page}, "
            f"items_per_page={self._items_per_page}, total_items={self._total_items})"
        )

    @property
    def state(self) -> PagerState:
        """Current lifecycle state of the cursor."""
        if self._current_page == 0:
            return PagerState.UNFETCHED
        if not self.has_next():
            return PagerState.EXHAUSTED
        return PagerState.BUFFERED

    def get_items_per_page(self) -> int:
        """Page size actually requested from the server."""
        return self._items_per_page

    def get_current_page(self) -> int:
        """Number of the buffered page (1-based), 0 if nothing was fetched."""
        return self._current_page

    def _fetch(self, page_number: int, url: Optional[str] = None) -> List[T]:
        """Fetch a page and commit it to the cursor.

        The cursor is only updated once the response has been decoded, so a
        failed fetch leaves the Pager in its previous state.
        """
        if page_number == self._current_page:
            return self._current_items

        logger.debug(
            f"Fetching page {page_number} of {self._element_type.__name__} "
            f"({self._items_per_page} per page)"
        )
        response: httpx.Response
        if url is not None:
            response = self._http_client.get_url(url, httpx.codes.OK)
        else:
            params = self._params.merged(
                {PAGE_PARAM: page_number, PER_PAGE_PARAM: self._items_per_page}
            )
            response = self._http_client.get(httpx.codes.OK, params, *self._path_segments)

        items = decode_list(response, self._element_type)
        info = PageInfo.from_response(response)

        self._current_page = page_number
        self._current_items = items
        if self._total_items < 0 and info.total_items >= 0:
            self._total_items = info.total_items
        if self._total_pages < 0 and info.total_pages >= 0:
            self._total_pages = info.total_pages
        self._next_page = info.next_page
        self._next_link = info.next_link
        self._has_link_header = info.has_link_header
        return items

    def _is_same_origin(self, url: str) -> bool:
        """Check that a link has the scheme, host and port of the API base URL."""
        try:
            link = httpx.URL(url)
        except httpx.InvalidURL:
            return False
        base = httpx.URL(self._http_client.config.api_url)
        return (link.scheme, link.host, link.port) == (base.scheme, base.host, base.port)

    def has_next(self) -> bool:
        """Check whether a page after the buffered one exists."""
        if self._current_page == 0:
            return True
        if not self._current_items:
            return False
        if self._total_items >= 0:
            return self._current_page * self._items_per_page < self._total_items
        if self._total_pages >= 0:
            return self._current_page < self._total_pages
        if self._next_link or self._next_page > 0:
            return True
        if self._has_link_header:
            return False
        return len(self._current_items) >= self._items_per_page

    def first(self) -> List[T]:
        """Fetch (or return the buffered) first page."""
        return self._fetch(1)

    def current(self) -> List[T]:
        """Return the buffered page, fetching the first page if needed."""
        if self._current_page == 0:
            return self.first()
        return self._current_items

    def next(self) -> List[T]:
        """Fetch the page after the buffered one.

        Follows the server's rel="next" link when it shares the API base
        URL's origin; any other link is ignored in favour of the page number.

        Returns:
            Items of the next page

        Raises:
            StopIteration: If there is no next page or it came back empty

        """
        if not self.has_next():
            raise StopIteration

        next_link = None
        if self._current_page > 0 and self._next_link:
            if self._is_same_origin(self._next_link):
                next_link = self._next_link
            else:
                logger.warning(
                    f"Ignoring next link outside {self._http_client.config.api_url}; "
                    f"fetching page {self._current_page + 1} by number"
                )
        items = self._fetch(self._current_page + 1, next_link)
        if not items:
            raise StopIteration
        return items

    __next__ = next

    def __iter__(self) -> Iterator[List[T]]:
        return self

    def page(self, page_number: int) -> List[T]:
        """Fetch a specific 1-based page (no-op if it is the buffered page)."""
        if page_number < 1:
            raise IndexOutOfRangeError(page_number)
        return self._fetch(page_number)

    def get(self, index: int) -> T:
        """Return the item at an absolute 0-based index.

        Fetches only the page owning the index, and only if it is not already
        buffered.

        Raises:
            IndexOutOfRangeError: If the index is negative, beyond the known
                total, or past the end of its page

        """
        if index < 0 or (self._total_items >= 0 and index >= self._total_items):
            raise IndexOutOfRangeError(index, self._total_items)

        page_number = index // self._items_per_page + 1
        offset = index % self._items_per_page
        items = self._fetch(page_number)

        if self._total_items >= 0 and index >= self._total_items:
            raise IndexOutOfRangeError(index, self._total_items)
        if offset >= len(items):
            raise IndexOutOfRangeError(index, self._total_items)
        return items[offset]

    def __getitem__(self, index: int) -> T:
        if not isinstance(index, int):
            raise TypeError("Pager indices must be integers")
        return self.get(index)

    def get_total_items(self) -> int:
        """Total number of items, fetching the first page if needed.

        Returns:
            The X-Total value, or -1 if the server does not report it

        """
        if self._current_page == 0:
            self.first()
        return self._total_items

    def get_total_pages(self) -> int:
        """Total number of pages, fetching the first page if needed.

        Returns:
            The X-Total-Pages value (or one derived from X-Total), -1 if unknown

        """
        if self._current_page == 0:
            self.first()
        if self._total_pages >= 0:
            return self._total_pages
        if self._total_items >= 0:
            return math.ceil(self._total_items / self._items_per_page)
        return -1

    def stream(self) -> Iterator[T]:
        """Lazily yield every item, starting over from the first page."""
        yield from self.first()
        while self.has_next():
            try:
                items = self.next()
            except StopIteration:
                return
            yield from items

    def all(self) -> List[T]:
        """Fetch every page and return all items in order."""
        return list(self.stream())
