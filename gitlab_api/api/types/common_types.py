"""Types shared by several GitLab resources."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Visibility(str, Enum):
    """Visibility level of a project or snippet."""

    PUBLIC = "public"
    PRIVATE = "private"
    INTERNAL = "internal"


class Author(BaseModel):
    """User reference embedded in other resources (author, assignee, ...)."""

    id: Optional[int] = Field(default=None, description="User ID")
    username: Optional[str] = Field(default=None, description="Username")
    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Public email")
    state: Optional[str] = Field(default=None, description="Account state")
    avatar_url: Optional[str] = Field(default=None, description="Avatar URL")
    web_url: Optional[str] = Field(default=None, description="Profile URL")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
