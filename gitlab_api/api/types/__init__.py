"""Request and response types of the GitLab API facades."""

from .common_types import Author, Visibility
from .merge_request_types import (
    ApprovedBy,
    Commit,
    Diff,
    MergeRequest,
    MergeRequestFilter,
    MergeRequestOrderBy,
    MergeRequestScope,
    MergeRequestState,
    MergeRequestView,
    Milestone,
    Participant,
    SortOrder,
    StateEvent,
)
from .snippet_types import Snippet

__all__ = [
    "ApprovedBy",
    "Author",
    "Commit",
    "Diff",
    "MergeRequest",
    "MergeRequestFilter",
    "MergeRequestOrderBy",
    "MergeRequestScope",
    "MergeRequestState",
    "MergeRequestView",
    "Milestone",
    "Participant",
    "Snippet",
    "SortOrder",
    "StateEvent",
    "Visibility",
]
