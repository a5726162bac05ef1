"""Snippets API implementation.

Provides typed interfaces for personal snippet endpoints:
- Create (POST /snippets)
- Delete (DELETE /snippets/:id)
- List and get (GET /snippets, GET /snippets/:id)
- Raw content (GET /snippets/:id/raw)
"""

from typing import List, Optional

import httpx

from ..models.optional import OptionalResult
from ..utils.form import GitLabApiForm
from ..utils.pagination import Pager
from .abstract_api import AbstractApi
from .response_utils import decode_entity, decode_list, decode_text
from .types.common_types import Visibility
from .types.snippet_types import Snippet


class SnippetsApi(AbstractApi):
    """Snippets API client."""

    SNIPPETS = "snippets"

    def create_snippet(
        self,
        title: str,
        file_name: str,
        content: str,
        visibility: Optional[Visibility] = None,
        description: Optional[str] = None,
    ) -> Snippet:
        """
        Create a snippet (POST /snippets).

        Args:
            title: Title (required)
            file_name: File name (required)
            content: File content (required)
            visibility: Optional visibility level
            description: Optional description

        Returns:
            The created snippet

        Raises:
            MissingRequiredParameterError: Before any request, if a required
                argument is None
        """
        params = (
            GitLabApiForm()
            .with_param("title", title, required=True)
            .with_param("file_name", file_name, required=True)
            .with_param("content", content, required=True)
            .with_param("visibility", visibility)
            .with_param("description", description)
            .build()
        )
        response = self.http_client.post(httpx.codes.CREATED, params, self.SNIPPETS)
        return decode_entity(response, Snippet)

    def delete_snippet(self, snippet_id: int) -> None:
        """Delete a snippet (DELETE /snippets/:id)."""
        self.http_client.delete(
            httpx.codes.NO_CONTENT, None, self.SNIPPETS, self.require("snippet_id", snippet_id)
        )

    def get_snippets(self, download_content: bool = False) -> List[Snippet]:
        """
        Get the user's snippets (first page at the default page size).

        Args:
            download_content: Also fetch each snippet's raw content

        Returns:
            List of snippets
        """
        response = self.http_client.get(
            httpx.codes.OK, self.page_params(per_page=None), self.SNIPPETS
        )
        snippets = decode_list(response, Snippet)

        if download_content:
            for snippet in snippets:
                snippet.content = self.get_snippet_content(snippet.id)

        return snippets

    def get_snippets_pager(self, items_per_page: Optional[int] = None) -> Pager[Snippet]:
        """Get a Pager over the user's snippets."""
        return self.create_pager(Snippet, items_per_page, None, self.SNIPPETS)

    def get_snippet_content(self, snippet_id: int) -> str:
        """Get the raw content of a snippet (GET /snippets/:id/raw)."""
        response = self.http_client.get(
            httpx.codes.OK, None, self.SNIPPETS, self.require("snippet_id", snippet_id), "raw"
        )
        return decode_text(response)

    def get_snippet(self, snippet_id: int, download_content: bool = False) -> Snippet:
        """
        Get a snippet (GET /snippets/:id).

        Args:
            snippet_id: Snippet ID
            download_content: Also fetch the raw content

        Returns:
            The snippet
        """
        response = self.http_client.get(
            httpx.codes.OK, None, self.SNIPPETS, self.require("snippet_id", snippet_id)
        )
        snippet = decode_entity(response, Snippet)

        if download_content:
            snippet.content = self.get_snippet_content(snippet.id)

        return snippet

    def get_optional_snippet(self, snippet_id: int) -> OptionalResult[Snippet]:
        """Get a snippet as Found(snippet) or Absent on 404."""
        return self.optional(lambda: self.get_snippet(snippet_id))
