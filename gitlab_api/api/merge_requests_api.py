"""Merge requests API implementation.

Provides typed interfaces for merge request endpoints:
- Listing (GET /merge_requests, GET /projects/:id/merge_requests)
- Single merge request, commits, changes and participants
- Create, update, delete, accept and cancel
- Approvals (GET approvals, POST approve, POST unapprove)

Merge requests are addressed by IID on V4 and by global ID on V3; the
``merge_request_iid`` arguments take whichever the configured version uses.
"""

from typing import List, Optional, Sequence, Union

import httpx

from ..models.config import ApiVersion
from ..models.optional import OptionalResult
from ..utils.form import GitLabApiForm
from ..utils.pagination import Pager
from .abstract_api import AbstractApi
from .response_utils import decode_entity, decode_list
from .types.merge_request_types import (
    Commit,
    MergeRequest,
    MergeRequestFilter,
    MergeRequestState,
    Participant,
    StateEvent,
)

ProjectId = Union[int, str]


class MergeRequestApi(AbstractApi):
    """Merge requests API client."""

    PROJECTS = "projects"
    MERGE_REQUESTS = "merge_requests"

    def _merge_request_path(self, project_id: ProjectId, merge_request_iid: int) -> tuple:
        return (
            self.PROJECTS,
            self.require("project_id", project_id),
            self.MERGE_REQUESTS,
            self.require("merge_request_iid", merge_request_iid),
        )

    # =========================================================================
    # Listing
    # =========================================================================

    def get_merge_requests(
        self,
        filter: Optional[MergeRequestFilter] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> List[MergeRequest]:
        """
        Get merge requests visible to the user (GET /merge_requests).

        Args:
            filter: Optional query filter
            page: Page to get (default: 1)
            per_page: Items per page (default: configured default)

        Returns:
            List of merge requests of the requested page

        Raises:
            GitLabApiError: If request fails
        """
        params = self.page_params(page if page is not None else 1, per_page)
        if filter is not None:
            params = params.merged(filter.get_query_params())
        response = self.http_client.get(httpx.codes.OK, params, self.MERGE_REQUESTS)
        return decode_list(response, MergeRequest)

    def get_merge_requests_pager(
        self, filter: Optional[MergeRequestFilter] = None, items_per_page: Optional[int] = None
    ) -> Pager[MergeRequest]:
        """
        Get a Pager over merge requests visible to the user.

        Args:
            filter: Optional query filter
            items_per_page: Items per page (capped at 100)

        Returns:
            Pager of MergeRequest
        """
        params = filter.get_query_params() if filter is not None else None
        return self.create_pager(MergeRequest, items_per_page, params, self.MERGE_REQUESTS)

    def get_project_merge_requests(
        self,
        project_id: ProjectId,
        state: Optional[MergeRequestState] = None,
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> List[MergeRequest]:
        """
        Get merge requests of a project (GET /projects/:id/merge_requests).

        Args:
            project_id: Project ID or URL path ("group/project")
            state: Optional state filter
            page: Page to get
            per_page: Items per page (default: configured default)

        Returns:
            List of merge requests of the requested page
        """
        params = (
            GitLabApiForm()
            .with_param("state", state)
            .build()
            .merged(self.page_params(page, per_page))
        )
        response = self.http_client.get(
            httpx.codes.OK,
            params,
            self.PROJECTS,
            self.require("project_id", project_id),
            self.MERGE_REQUESTS,
        )
        return decode_list(response, MergeRequest)

    def get_project_merge_requests_pager(
        self,
        project_id: ProjectId,
        items_per_page: Optional[int] = None,
        state: Optional[MergeRequestState] = None,
    ) -> Pager[MergeRequest]:
        """
        Get a Pager over the merge requests of a project.

        Args:
            project_id: Project ID or URL path
            items_per_page: Items per page (capped at 100)
            state: Optional state filter

        Returns:
            Pager of MergeRequest
        """
        params = GitLabApiForm().with_param("state", state).build()
        return self.create_pager(
            MergeRequest,
            items_per_page,
            params,
            self.PROJECTS,
            self.require("project_id", project_id),
            self.MERGE_REQUESTS,
        )

    # =========================================================================
    # Single merge request
    # =========================================================================

    def get_merge_request(self, project_id: ProjectId, merge_request_iid: int) -> MergeRequest:
        """
        Get a merge request (GET /projects/:id/merge_requests/:merge_request_iid).

        Args:
            project_id: Project ID or URL path
            merge_request_iid: Merge request IID (global ID on V3)

        Returns:
            The merge request

        Raises:
            UnexpectedStatusError: 404 if it does not exist
        """
        response = self.http_client.get(
            httpx.codes.OK, None, *self._merge_request_path(project_id, merge_request_iid)
        )
        return decode_entity(response, MergeRequest)

    def get_optional_merge_request(
        self, project_id: ProjectId, merge_request_iid: int
    ) -> OptionalResult[MergeRequest]:
        """
        Get a merge request as Found(merge_request) or Absent on 404.

        Any other failure is raised.
        """
        return self.optional(lambda: self.get_merge_request(project_id, merge_request_iid))

    def get_commits(
        self,
        project_id: ProjectId,
        merge_request_iid: int,
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> List[Commit]:
        """
        Get the commits of a merge request (GET .../merge_requests/:iid/commits).

        Args:
            project_id: Project ID or URL path
            merge_request_iid: Merge request IID
            page: Page to get
            per_page: Items per page (default: configured default)

        Returns:
            List of commits of the requested page
        """
        response = self.http_client.get(
            httpx.codes.OK,
            self.page_params(page, per_page),
            *self._merge_request_path(project_id, merge_request_iid),
            "commits",
        )
        return decode_list(response, Commit)

    def get_commits_pager(
        self, project_id: ProjectId, merge_request_iid: int, items_per_page: Optional[int] = None
    ) -> Pager[Commit]:
        """Get a Pager over the commits of a merge request."""
        return self.create_pager(
            Commit,
            items_per_page,
            None,
            *self._merge_request_path(project_id, merge_request_iid),
            "commits",
        )

    def get_merge_request_changes(
        self, project_id: ProjectId, merge_request_iid: int
    ) -> MergeRequest:
        """Get a merge request with its file changes (GET .../changes)."""
        response = self.http_client.get(
            httpx.codes.OK,
            None,
            *self._merge_request_path(project_id, merge_request_iid),
            "changes",
        )
        return decode_entity(response, MergeRequest)

    def get_participants(
        self,
        project_id: ProjectId,
        merge_request_iid: int,
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> List[Participant]:
        """Get the participants of a merge request (GET .../participants)."""
        response = self.http_client.get(
            httpx.codes.OK,
            self.page_params(page, per_page),
            *self._merge_request_path(project_id, merge_request_iid),
            "participants",
        )
        return decode_list(response, Participant)

    def get_participants_pager(
        self, project_id: ProjectId, merge_request_iid: int, items_per_page: Optional[int] = None
    ) -> Pager[Participant]:
        """Get a Pager over the participants of a merge request."""
        return self.create_pager(
            Participant,
            items_per_page,
            None,
            *self._merge_request_path(project_id, merge_request_iid),
            "participants",
        )

    # =========================================================================
    # Create / update / delete
    # =========================================================================

    def create_merge_request(
        self,
        project_id: ProjectId,
        source_branch: str,
        target_branch: str,
        title: str,
        description: Optional[str] = None,
        assignee_id: Optional[int] = None,
        target_project_id: Optional[int] = None,
        labels: Optional[Union[str, Sequence[str]]] = None,
        milestone_id: Optional[int] = None,
        remove_source_branch: Optional[bool] = None,
    ) -> MergeRequest:
        """
        Create a merge request (POST /projects/:id/merge_requests).

        Args:
            project_id: Project ID or URL path
            source_branch: Source branch (required)
            target_branch: Target branch (required)
            title: Title (required)
            description: Optional description
            assignee_id: Optional assignee user ID
            target_project_id: Optional target project ID (for forks)
            labels: Optional labels, sent comma separated
            milestone_id: Optional milestone ID
            remove_source_branch: Remove the source branch when merged

        Returns:
            The created merge request

        Raises:
            MissingRequiredParameterError: Before any request, if a required
                argument is None
        """
        self.require("project_id", project_id)
        params = (
            GitLabApiForm()
            .with_param("source_branch", source_branch, required=True)
            .with_param("target_branch", target_branch, required=True)
            .with_param("title", title, required=True)
            .with_param("description", description)
            .with_param("assignee_id", assignee_id)
            .with_param("target_project_id", target_project_id)
            .with_param("labels", labels)
            .with_param("milestone_id", milestone_id)
            .with_param("remove_source_branch", remove_source_branch)
            .build()
        )
        response = self.http_client.post(
            httpx.codes.CREATED, params, self.PROJECTS, project_id, self.MERGE_REQUESTS
        )
        return decode_entity(response, MergeRequest)

    def update_merge_request(
        self,
        project_id: ProjectId,
        merge_request_iid: int,
        target_branch: Optional[str] = None,
        title: Optional[str] = None,
        assignee_id: Optional[int] = None,
        description: Optional[str] = None,
        state_event: Optional[StateEvent] = None,
        labels: Optional[Union[str, Sequence[str]]] = None,
        milestone_id: Optional[int] = None,
        remove_source_branch: Optional[bool] = None,
        source_branch: Optional[str] = None,
    ) -> MergeRequest:
        """
        Update a merge request (PUT /projects/:id/merge_requests/:iid).

        Only the arguments that are not None are sent.

        Returns:
            The updated merge request
        """
        path = self._merge_request_path(project_id, merge_request_iid)
        params = (
            GitLabApiForm()
            .with_param("source_branch", source_branch)
            .with_param("target_branch", target_branch)
            .with_param("title", title)
            .with_param("assignee_id", assignee_id)
            .with_param("description", description)
            .with_param("state_event", state_event)
            .with_param("labels", labels)
            .with_param("milestone_id", milestone_id)
            .with_param("remove_source_branch", remove_source_branch)
            .build()
        )
        response = self.http_client.put(httpx.codes.OK, params, *path)
        return decode_entity(response, MergeRequest)

    def delete_merge_request(self, project_id: ProjectId, merge_request_iid: int) -> None:
        """
        Delete a merge request (DELETE /projects/:id/merge_requests/:iid).

        V3 answers 200, V4 answers 204.
        """
        path = self._merge_request_path(project_id, merge_request_iid)
        expected_status = (
            httpx.codes.OK if self.is_api_version(ApiVersion.V3) else httpx.codes.NO_CONTENT
        )
        self.http_client.delete(expected_status, None, *path)

    # =========================================================================
    # Merge
    # =========================================================================

    def accept_merge_request(
        self,
        project_id: ProjectId,
        merge_request_iid: int,
        merge_commit_message: Optional[str] = None,
        should_remove_source_branch: Optional[bool] = None,
        merge_when_pipeline_succeeds: Optional[bool] = None,
        sha: Optional[str] = None,
    ) -> MergeRequest:
        """
        Merge a merge request (PUT /projects/:id/merge_requests/:iid/merge).

        GitLab answers 405 if it cannot be merged, 406 if it is already
        merged or closed, 409 if ``sha`` does not match the source HEAD and
        401 if the user may not merge; these surface as UnexpectedStatusError.

        Args:
            project_id: Project ID or URL path
            merge_request_iid: Merge request IID
            merge_commit_message: Custom merge commit message
            should_remove_source_branch: Remove the source branch
            merge_when_pipeline_succeeds: Merge once the pipeline succeeds
                (sent as merge_when_build_succeeds on V3)
            sha: Expected HEAD of the source branch

        Returns:
            The merged merge request
        """
        path = self._merge_request_path(project_id, merge_request_iid)
        pipeline_param = (
            "merge_when_build_succeeds"
            if self.is_api_version(ApiVersion.V3)
            else "merge_when_pipeline_succeeds"
        )
        params = (
            GitLabApiForm()
            .with_param("merge_commit_message", merge_commit_message)
            .with_param("should_remove_source_branch", should_remove_source_branch)
            .with_param(pipeline_param, merge_when_pipeline_succeeds)
            .with_param("sha", sha)
            .build()
        )
        response = self.http_client.put(httpx.codes.OK, params, *path, "merge")
        return decode_entity(response, MergeRequest)

    def cancel_merge_request(self, project_id: ProjectId, merge_request_iid: int) -> MergeRequest:
        """
        Cancel "merge when pipeline succeeds"
        (PUT .../merge_requests/:iid/cancel_merge_when_pipeline_succeeds).
        """
        path = self._merge_request_path(project_id, merge_request_iid)
        response = self.http_client.put(
            httpx.codes.OK, None, *path, "cancel_merge_when_pipeline_succeeds"
        )
        return decode_entity(response, MergeRequest)

    # =========================================================================
    # Approvals
    # =========================================================================

    def get_merge_request_approvals(
        self, project_id: ProjectId, merge_request_iid: int
    ) -> MergeRequest:
        """Get the approval state of a merge request (GET .../approvals)."""
        path = self._merge_request_path(project_id, merge_request_iid)
        response = self.http_client.get(httpx.codes.OK, None, *path, "approvals")
        return decode_entity(response, MergeRequest)

    def approve_merge_request(
        self, project_id: ProjectId, merge_request_iid: int, sha: Optional[str] = None
    ) -> MergeRequest:
        """
        Approve a merge request (POST .../approve).

        Args:
            project_id: Project ID or URL path
            merge_request_iid: Merge request IID
            sha: Optional HEAD the approval applies to (409 on mismatch)
        """
        path = self._merge_request_path(project_id, merge_request_iid)
        params = GitLabApiForm().with_param("sha", sha).build()
        response = self.http_client.post(httpx.codes.OK, params, *path, "approve")
        return decode_entity(response, MergeRequest)

    def unapprove_merge_request(
        self, project_id: ProjectId, merge_request_iid: int
    ) -> MergeRequest:
        """Withdraw the user's approval (POST .../unapprove)."""
        path = self._merge_request_path(project_id, merge_request_iid)
        response = self.http_client.post(httpx.codes.OK, None, *path, "unapprove")
        return decode_entity(response, MergeRequest)
