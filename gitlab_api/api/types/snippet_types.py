"""Snippet API response types."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .common_types import Author, Visibility


class Snippet(BaseModel):
    """A personal snippet.

    ``content`` is not part of the snippet resource itself; it is filled in
    from the raw endpoint when content download is requested.
    """

    id: Optional[int] = Field(default=None, description="Snippet ID")
    title: Optional[str] = Field(default=None, description="Title")
    file_name: Optional[str] = Field(default=None, description="File name")
    description: Optional[str] = Field(default=None, description="Description")
    visibility: Optional[Visibility] = Field(default=None, description="Visibility level")
    author: Optional[Author] = Field(default=None, description="Author")
    web_url: Optional[str] = Field(default=None, description="Web URL")
    raw_url: Optional[str] = Field(default=None, description="Raw content URL")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Update timestamp")
    expires_at: Optional[datetime] = Field(default=None, description="Expiry timestamp")
    content: Optional[str] = Field(default=None, description="Downloaded file content")
