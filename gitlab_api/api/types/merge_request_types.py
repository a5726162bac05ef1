"""Merge request API request and response types.

Field names follow the GitLab REST API (snake_case).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .common_types import Author


class MergeRequestState(str, Enum):
    """Merge request state filter values."""

    OPENED = "opened"
    CLOSED = "closed"
    LOCKED = "locked"
    MERGED = "merged"
    ALL = "all"


class MergeRequestScope(str, Enum):
    """Scope filter of the global merge request listing."""

    CREATED_BY_ME = "created_by_me"
    ASSIGNED_TO_ME = "assigned_to_me"
    ALL = "all"


class MergeRequestView(str, Enum):
    """Amount of detail returned by merge request listings."""

    SIMPLE = "simple"


class MergeRequestOrderBy(str, Enum):
    """Sort field of merge request listings."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class StateEvent(str, Enum):
    """State transitions accepted when updating a merge request."""

    CLOSE = "close"
    REOPEN = "reopen"


class Milestone(BaseModel):
    """Milestone reference embedded in a merge request."""

    id: Optional[int] = Field(default=None, description="Milestone ID")
    iid: Optional[int] = Field(default=None, description="Project-scoped milestone IID")
    project_id: Optional[int] = Field(default=None, description="Project ID")
    title: Optional[str] = Field(default=None, description="Title")
    description: Optional[str] = Field(default=None, description="Description")
    state: Optional[str] = Field(default=None, description="State")
    due_date: Optional[str] = Field(default=None, description="Due date (YYYY-MM-DD)")


class Diff(BaseModel):
    """One file change of a merge request."""

    old_path: Optional[str] = Field(default=None, description="Path before the change")
    new_path: Optional[str] = Field(default=None, description="Path after the change")
    a_mode: Optional[str] = Field(default=None, description="File mode before")
    b_mode: Optional[str] = Field(default=None, description="File mode after")
    diff: Optional[str] = Field(default=None, description="Unified diff")
    new_file: Optional[bool] = Field(default=None, description="File was added")
    renamed_file: Optional[bool] = Field(default=None, description="File was renamed")
    deleted_file: Optional[bool] = Field(default=None, description="File was deleted")


class ApprovedBy(BaseModel):
    """Approval entry of a merge request."""

    user: Optional[Author] = Field(default=None, description="Approving user")


class MergeRequest(BaseModel):
    """A GitLab merge request.

    ``approvals_*`` and ``approved_by`` are only populated by the approvals
    endpoint; ``changes`` only by the changes endpoint.
    """

    id: Optional[int] = Field(default=None, description="Global merge request ID")
    iid: Optional[int] = Field(default=None, description="Project-scoped merge request IID")
    project_id: Optional[int] = Field(default=None, description="Project ID")
    title: Optional[str] = Field(default=None, description="Title")
    description: Optional[str] = Field(default=None, description="Description")
    state: Optional[str] = Field(default=None, description="State")
    merge_status: Optional[str] = Field(default=None, description="Mergeability status")
    source_branch: Optional[str] = Field(default=None, description="Source branch")
    target_branch: Optional[str] = Field(default=None, description="Target branch")
    source_project_id: Optional[int] = Field(default=None, description="Source project ID")
    target_project_id: Optional[int] = Field(default=None, description="Target project ID")
    author: Optional[Author] = Field(default=None, description="Author")
    assignee: Optional[Author] = Field(default=None, description="Assignee")
    labels: List[str] = Field(default_factory=list, description="Labels")
    milestone: Optional[Milestone] = Field(default=None, description="Milestone")
    sha: Optional[str] = Field(default=None, description="Head commit SHA")
    merge_commit_sha: Optional[str] = Field(default=None, description="Merge commit SHA")
    merge_when_pipeline_succeeds: Optional[bool] = Field(
        default=None, description="Merge automatically once the pipeline succeeds"
    )
    should_remove_source_branch: Optional[bool] = Field(
        default=None, description="Source branch removed on merge"
    )
    force_remove_source_branch: Optional[bool] = Field(
        default=None, description="Source branch removal forced by the author"
    )
    work_in_progress: Optional[bool] = Field(default=None, description="Marked as WIP")
    upvotes: Optional[int] = Field(default=None, description="Upvotes")
    downvotes: Optional[int] = Field(default=None, description="Downvotes")
    user_notes_count: Optional[int] = Field(default=None, description="Number of notes")
    web_url: Optional[str] = Field(default=None, description="Web URL")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Update timestamp")
    merged_at: Optional[datetime] = Field(default=None, description="Merge timestamp")
    closed_at: Optional[datetime] = Field(default=None, description="Close timestamp")
    changes: Optional[List[Diff]] = Field(default=None, description="File changes")
    approvals_required: Optional[int] = Field(default=None, description="Required approvals")
    approvals_left: Optional[int] = Field(default=None, description="Approvals still needed")
    approved_by: Optional[List[ApprovedBy]] = Field(default=None, description="Approvers")


class Commit(BaseModel):
    """A commit belonging to a merge request."""

    id: Optional[str] = Field(default=None, description="Full SHA")
    short_id: Optional[str] = Field(default=None, description="Abbreviated SHA")
    title: Optional[str] = Field(default=None, description="First line of the message")
    message: Optional[str] = Field(default=None, description="Full message")
    author_name: Optional[str] = Field(default=None, description="Author name")
    author_email: Optional[str] = Field(default=None, description="Author email")
    authored_date: Optional[datetime] = Field(default=None, description="Authored timestamp")
    committer_name: Optional[str] = Field(default=None, description="Committer name")
    committer_email: Optional[str] = Field(default=None, description="Committer email")
    committed_date: Optional[datetime] = Field(default=None, description="Commit timestamp")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
    parent_ids: Optional[List[str]] = Field(default=None, description="Parent SHAs")


class Participant(Author):
    """A user taking part in a merge request discussion."""

    pass


class MergeRequestFilter(BaseModel):
    """Query filter of the global merge request listing (GET /merge_requests)."""

    project_id: Optional[int] = Field(default=None, description="Restrict to a project")
    state: Optional[MergeRequestState] = Field(default=None, description="State")
    order_by: Optional[MergeRequestOrderBy] = Field(default=None, description="Sort field")
    sort: Optional[SortOrder] = Field(default=None, description="Sort direction")
    milestone: Optional[str] = Field(default=None, description="Milestone title")
    view: Optional[MergeRequestView] = Field(default=None, description="Detail level")
    labels: Optional[List[str]] = Field(default=None, description="Labels (all must match)")
    created_after: Optional[datetime] = Field(default=None, description="Created after")
    created_before: Optional[datetime] = Field(default=None, description="Created before")
    updated_after: Optional[datetime] = Field(default=None, description="Updated after")
    updated_before: Optional[datetime] = Field(default=None, description="Updated before")
    scope: Optional[MergeRequestScope] = Field(default=None, description="Scope")
    author_id: Optional[int] = Field(default=None, description="Author user ID")
    assignee_id: Optional[int] = Field(default=None, description="Assignee user ID")
    my_reaction_emoji: Optional[str] = Field(default=None, description="Reaction emoji")
    source_branch: Optional[str] = Field(default=None, description="Source branch")
    target_branch: Optional[str] = Field(default=None, description="Target branch")
    search: Optional[str] = Field(default=None, description="Search in title/description")

    def get_query_params(self) -> Dict[str, Any]:
        """Filter fields that are set, keyed by their GitLab parameter name."""
        return self.model_dump(exclude_none=True)
