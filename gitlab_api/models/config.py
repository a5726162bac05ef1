"""
Configuration types for the GitLab API client.

This module contains the Pydantic model that defines client configuration and
the API version enumeration shared by the dispatcher and the facades.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiVersion(str, Enum):
    """GitLab REST API generation.

    V3 addresses merge requests by global ID and uses build-era parameter
    names; V4 addresses them by project-scoped IID.
    """

    V3 = "v3"
    V4 = "v4"

    @property
    def api_namespace(self) -> str:
        """Path prefix for this version (e.g. ``/api/v4``)."""
        return f"/api/{self.value}"


class GitLabClientConfig(BaseModel):
    """Main GitLab client configuration.

    Required fields:
    - gitlab_url: GitLab server base URL (without the /api/vN suffix)

    Optional fields:
    - private_token: Personal access token sent as PRIVATE-TOKEN
    - api_version: API generation used for every request
    - default_per_page: Page size used when a call does not specify one
    - timeout: Transport timeout in seconds
    - log_level: Logging level (debug, info, warn, error)
    """

    model_config = ConfigDict(frozen=True)

    gitlab_url: str = Field(..., description="GitLab server base URL")
    private_token: Optional[str] = Field(default=None, description="Personal access token")
    api_version: ApiVersion = Field(default=ApiVersion.V4, description="REST API version")
    default_per_page: int = Field(
        default=96, ge=1, description="Items per page when none is requested"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    log_level: Literal["debug", "info", "warn", "error"] = Field(
        default="info", description="Log level"
    )

    @property
    def api_url(self) -> str:
        """Versioned API base URL (e.g. https://gitlab.com/api/v4)."""
        return f"{self.gitlab_url.rstrip('/')}{self.api_version.api_namespace}"
