"""
Pagination types for the GitLab API client.

This module contains the Pydantic model describing the pagination metadata
GitLab returns in response headers for list endpoints.
"""

from typing import Optional

import httpx
from pydantic import BaseModel, Field

TOTAL_HEADER = "X-Total"
TOTAL_PAGES_HEADER = "X-Total-Pages"
PAGE_HEADER = "X-Page"
PER_PAGE_HEADER = "X-Per-Page"
NEXT_PAGE_HEADER = "X-Next-Page"
LINK_HEADER = "Link"


def _header_int(headers: httpx.Headers, name: str) -> int:
    """Read a decimal header, returning -1 when missing or malformed."""
    value = headers.get(name)
    if value is None or not value.strip():
        return -1
    try:
        return int(value)
    except ValueError:
        return -1


class PageInfo(BaseModel):
    """
    Pagination metadata read from a single list response.

    Fields:
        total_items: Value of X-Total, -1 when not reported
        total_pages: Value of X-Total-Pages, -1 when not reported
        page: Value of X-Page, -1 when not reported
        per_page: Value of X-Per-Page, -1 when not reported
        next_page: Value of X-Next-Page, -1 when empty or not reported
        next_link: URL of the rel="next" Link entry, if any
        has_link_header: Whether the response carried a Link header at all
    """

    total_items: int = Field(default=-1, description="Total number of items")
    total_pages: int = Field(default=-1, description="Total number of pages")
    page: int = Field(default=-1, description="Page number of this response (1-based)")
    per_page: int = Field(default=-1, description="Items per page of this response")
    next_page: int = Field(default=-1, description="Next page number")
    next_link: Optional[str] = Field(default=None, description="rel=next URL")
    has_link_header: bool = Field(default=False, description="Link header present")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "PageInfo":
        """Build PageInfo from the headers of a list response."""
        headers = response.headers
        next_link = None
        if LINK_HEADER in headers:
            next_link = response.links.get("next", {}).get("url")
        return cls(
            total_items=_header_int(headers, TOTAL_HEADER),
            total_pages=_header_int(headers, TOTAL_PAGES_HEADER),
            page=_header_int(headers, PAGE_HEADER),
            per_page=_header_int(headers, PER_PAGE_HEADER),
            next_page=_header_int(headers, NEXT_PAGE_HEADER),
            next_link=next_link,
            has_link_header=LINK_HEADER in headers,
        )
